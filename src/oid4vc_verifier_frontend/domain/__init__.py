"""Domain layer - Value objects, JARM options, key material and response models"""

from oid4vc_verifier_frontend.domain.value_objects import (
    JarMode,
    Nonce,
    PresentationDefinitionMode,
    PresentationId,
    PresentationType,
    ResponseCode,
    ResponseMode,
)
from oid4vc_verifier_frontend.domain.jarm_option import (
    JarmEncrypted,
    JarmOption,
    JarmSigned,
    JarmSignedAndEncrypted,
    describe_jarm_option,
    is_encrypted,
    is_signed,
    jwe_alg,
    jwe_enc,
    jws_alg,
    parse_jarm_option,
)
from oid4vc_verifier_frontend.domain.ephemeral_key import (
    EphemeralECDHPrivateJwk,
    EphemeralECDHPublicJwk,
)
from oid4vc_verifier_frontend.domain.wallet_response import (
    AuthorizationResponse,
    PresentationSubmission,
    WalletResponseEnvelope,
)
from oid4vc_verifier_frontend.domain.verification import (
    MdocDocument,
    MdocVerifyResult,
    VerificationResult,
)
from oid4vc_verifier_frontend.domain.frontend_config import (
    DEFAULT_RESPONSE_CODE_PLACEHOLDER,
    FrontendConfig,
)

__all__ = [
    # Value objects
    "Nonce",
    "PresentationId",
    "ResponseCode",
    "PresentationType",
    "ResponseMode",
    "JarMode",
    "PresentationDefinitionMode",
    # JARM
    "JarmOption",
    "JarmSigned",
    "JarmEncrypted",
    "JarmSignedAndEncrypted",
    "jws_alg",
    "jwe_alg",
    "jwe_enc",
    "is_signed",
    "is_encrypted",
    "parse_jarm_option",
    "describe_jarm_option",
    # Keys
    "EphemeralECDHPrivateJwk",
    "EphemeralECDHPublicJwk",
    # Wallet response
    "AuthorizationResponse",
    "PresentationSubmission",
    "WalletResponseEnvelope",
    # Verification
    "MdocDocument",
    "MdocVerifyResult",
    "VerificationResult",
    # Configuration
    "FrontendConfig",
    "DEFAULT_RESPONSE_CODE_PLACEHOLDER",
]
