"""Output ports - Interfaces for external dependencies"""

from oid4vc_verifier_frontend.port.output.session import (
    SESSION_SCHEMA,
    SESSION_SCHEMA_VERSION,
    TRANSACTION_KEYS,
    Session,
    SessionError,
    SessionKey,
    validate_session_value,
)
from oid4vc_verifier_frontend.port.output.http_client import (
    HttpClient,
    HttpError,
    HttpErrorType,
    HttpResponse,
    HttpResponseMetadata,
)
from oid4vc_verifier_frontend.port.output.jose_service import (
    EphemeralKeyGenerator,
    JarmVerificationError,
    JarmVerifier,
    JoseError,
    KeyGenerationError,
)
from oid4vc_verifier_frontend.port.output.mdoc_verifier import (
    MdocVerificationError,
    MdocVerifier,
)
from oid4vc_verifier_frontend.port.output.generators import (
    GenerateNonce,
    GeneratePresentationDefinition,
    GenerateWalletRedirectUri,
    GenerateWalletResponseRedirectUriTemplate,
    IsMobile,
    UrlGenerationError,
    UrlGenerationErrorType,
)
from oid4vc_verifier_frontend.port.output.qrcode_service import (
    QrCodeError,
    QrCodeFormat,
    QrCodeService,
)

__all__ = [
    # Session
    "Session",
    "SessionError",
    "SessionKey",
    "SESSION_SCHEMA",
    "SESSION_SCHEMA_VERSION",
    "TRANSACTION_KEYS",
    "validate_session_value",
    # HTTP
    "HttpClient",
    "HttpError",
    "HttpErrorType",
    "HttpResponse",
    "HttpResponseMetadata",
    # JOSE
    "EphemeralKeyGenerator",
    "JarmVerifier",
    "JoseError",
    "KeyGenerationError",
    "JarmVerificationError",
    # MDOC
    "MdocVerifier",
    "MdocVerificationError",
    # Generators
    "GenerateNonce",
    "GeneratePresentationDefinition",
    "GenerateWalletRedirectUri",
    "GenerateWalletResponseRedirectUriTemplate",
    "IsMobile",
    "UrlGenerationError",
    "UrlGenerationErrorType",
    # QR Code Service
    "QrCodeService",
    "QrCodeFormat",
    "QrCodeError",
]
