"""Configuration loader for the verifier frontend"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from oid4vc_verifier_frontend.domain import FrontendConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "VERIFIER_FRONTEND_"

REQUIRED_SETTINGS = ("api_base_url", "public_url", "wallet_url")

OPTIONAL_SETTINGS = (
    "init_transaction_api_path",
    "get_wallet_response_api_path",
    "wallet_response_redirect_path",
    "wallet_response_redirect_query_template",
    "token_type",
    "response_mode",
    "jar_mode",
    "presentation_definition_mode",
    "authorization_signed_response_alg",
    "authorization_encrypted_response_alg",
    "authorization_encrypted_response_enc",
    "request_timeout_seconds",
    "session_ttl_seconds",
    "home_view_path",
)


def env_name(setting: str) -> str:
    return f"{ENV_PREFIX}{setting.upper()}"


def load_config_from_env() -> FrontendConfig | None:
    """
    Load frontend configuration from environment variables.

    Environment variables:
    - VERIFIER_FRONTEND_API_BASE_URL: Verifier backend base URL (required)
    - VERIFIER_FRONTEND_PUBLIC_URL: Public URL of this frontend (required)
    - VERIFIER_FRONTEND_WALLET_URL: Wallet URL, e.g. openid4vp://authorize (required)
    - VERIFIER_FRONTEND_<SETTING>: Any other FrontendConfig field, upper-cased.
      An empty value unsets an optional setting (e.g. disables JARM encryption)

    Returns:
        FrontendConfig if environment is properly configured, None otherwise

    Raises:
        pydantic.ValidationError: If a value is present but invalid
    """
    values: Dict[str, Any] = {}
    for setting in REQUIRED_SETTINGS:
        value = os.getenv(env_name(setting))
        if not value:
            return None
        values[setting] = value

    for setting in OPTIONAL_SETTINGS:
        value = os.getenv(env_name(setting))
        if value is None:
            continue
        values[setting] = value or None

    return FrontendConfig(**values)


def load_wallet_jwks_from_env() -> Optional[List[Dict[str, Any]]]:
    """
    Load the wallet's JARM signing keys.

    VERIFIER_FRONTEND_WALLET_JWKS points to a JWK Set file. When unset, signed
    JARM responses are decoded without a signature check.

    Raises:
        FileNotFoundError: If the variable points to a missing file
    """
    path = os.getenv(env_name("wallet_jwks"))
    if not path:
        return None

    jwks_file = Path(path)
    if not jwks_file.exists():
        raise FileNotFoundError(f"Wallet JWK Set not found: {path}")

    with open(jwks_file, "r") as f:
        jwks = json.load(f)

    keys = jwks.get("keys") if isinstance(jwks, dict) else None
    if not isinstance(keys, list) or not keys:
        raise ValueError(f"Wallet JWK Set has no keys: {path}")
    return keys


def create_test_config(**overrides: Any) -> FrontendConfig:
    """
    Create a configuration for tests and local development.

    Points at a backend on localhost:8080 and a frontend on localhost:3000.

    Args:
        **overrides: FrontendConfig fields to replace

    Returns:
        FrontendConfig with test settings
    """
    values: Dict[str, Any] = {
        "api_base_url": "http://localhost:8080",
        "public_url": "http://localhost:3000",
        "wallet_url": "eudi-openid4vp://verifier-backend.eudiw.dev",
    }
    values.update(overrides)
    return FrontendConfig(**values)


def load_or_create_config() -> FrontendConfig:
    """
    Load configuration from environment or create test config.

    First tries to load from environment variables.
    If not available, creates a test configuration.

    Returns:
        FrontendConfig
    """
    config = load_config_from_env()
    if config is None:
        log.warning("No environment configuration found, using test config")
        config = create_test_config()
    else:
        log.info("Loaded configuration from environment")

    return config
