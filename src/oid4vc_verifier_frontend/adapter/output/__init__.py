"""Output adapters - Infrastructure implementations of output ports"""

from oid4vc_verifier_frontend.adapter.output.cfg import (
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
)
from oid4vc_verifier_frontend.adapter.output.device import default_is_mobile
from oid4vc_verifier_frontend.adapter.output.http import HttpxClient
from oid4vc_verifier_frontend.adapter.output.jose import JoserfcEphemeralKeyGenerator, JoserfcJarmVerifier
from oid4vc_verifier_frontend.adapter.output.mdoc import StubMdocVerifier
from oid4vc_verifier_frontend.adapter.output.persistence import InMemorySession, InMemorySessionStore
from oid4vc_verifier_frontend.adapter.output.prex import mdl_presentation_definition
from oid4vc_verifier_frontend.adapter.output.qrcode import QrCodeServiceImpl

__all__ = [
    "default_generate_nonce",
    "default_generate_wallet_redirect_uri",
    "default_generate_wallet_response_redirect_uri_template",
    "default_is_mobile",
    "mdl_presentation_definition",
    "HttpxClient",
    "JoserfcEphemeralKeyGenerator",
    "JoserfcJarmVerifier",
    "StubMdocVerifier",
    "InMemorySession",
    "InMemorySessionStore",
    "QrCodeServiceImpl",
]
