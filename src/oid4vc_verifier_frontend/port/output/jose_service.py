"""JOSE ports - Ephemeral key generation and JARM verification"""

from abc import ABC, abstractmethod

from returns.result import Result

from oid4vc_verifier_frontend.domain import (
    AuthorizationResponse,
    EphemeralECDHPrivateJwk,
    JarmOption,
)


class JoseError(Exception):
    """Base exception for JOSE operations"""

    pass


class KeyGenerationError(JoseError):
    """Error while generating key material"""

    pass


class JarmVerificationError(JoseError):
    """JARM payload could not be decrypted, verified or decoded"""

    pass


class EphemeralKeyGenerator(ABC):
    """Mints the per-transaction ECDH key pair"""

    @abstractmethod
    async def generate(self) -> Result[EphemeralECDHPrivateJwk, KeyGenerationError]:
        """
        Generate a fresh ephemeral ECDH private key.

        Returns:
            Success(EphemeralECDHPrivateJwk) or Failure(KeyGenerationError)
        """
        pass


class JarmVerifier(ABC):
    """
    Recovers the authorization response from a JARM payload.

    Verification failure is reported as Failure, never raised.
    """

    @abstractmethod
    async def verify(
        self,
        jarm_option: JarmOption,
        private_jwk: EphemeralECDHPrivateJwk,
        response: str,
    ) -> Result[AuthorizationResponse, JarmVerificationError]:
        """
        Decrypt and/or verify a JARM payload.

        Args:
            jarm_option: Expected protection mode
            private_jwk: Ephemeral private key for decryption
            response: Compact JWS/JWE

        Returns:
            Success(AuthorizationResponse) or Failure(JarmVerificationError)
        """
        pass
