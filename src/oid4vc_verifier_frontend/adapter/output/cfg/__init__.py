from oid4vc_verifier_frontend.adapter.output.cfg.generators import (
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
)

__all__ = [
    "default_generate_nonce",
    "default_generate_wallet_redirect_uri",
    "default_generate_wallet_response_redirect_uri_template",
]
