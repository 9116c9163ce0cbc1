"""MDOC verifier port - Interface for credential verification"""

from abc import ABC, abstractmethod

from oid4vc_verifier_frontend.domain import MdocVerifyResult


class MdocVerificationError(Exception):
    """Technical failure while verifying an MDOC (not a negative result)"""

    pass


class MdocVerifier(ABC):
    """
    Verifies an MSO MDoc (ISO 18013-5) DeviceResponse.

    A credential that fails verification is reported as valid=False.
    Exceptions are reserved for technical failures (undecodable input, etc.).
    """

    @abstractmethod
    async def verify(self, vp_token: str) -> MdocVerifyResult:
        """
        Verify a VP token.

        Args:
            vp_token: Base64url-encoded DeviceResponse

        Returns:
            MdocVerifyResult

        Raises:
            MdocVerificationError: On technical failure
        """
        pass
