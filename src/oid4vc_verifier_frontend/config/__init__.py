"""Configuration module"""

from oid4vc_verifier_frontend.config.loader import (
    create_test_config,
    load_config_from_env,
    load_or_create_config,
    load_wallet_jwks_from_env,
)

__all__ = ["load_config_from_env", "load_wallet_jwks_from_env", "create_test_config", "load_or_create_config"]
