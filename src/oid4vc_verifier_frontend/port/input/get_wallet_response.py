"""Get wallet response use case - Retrieve and verify the wallet's response"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Final, Optional

from returns.result import Result

from oid4vc_verifier_frontend.domain import ResponseCode, VerificationResult
from oid4vc_verifier_frontend.port.input.errors import (
    ServiceError,
    is_malformed_data,
    is_session_failure,
)
from oid4vc_verifier_frontend.port.output import MdocVerificationError, Session


class GetWalletResponseErrorType(str, Enum):
    """Error kinds of the get wallet response use case"""

    MISSING_PRESENTATION_ID: Final[str] = "MISSING_PRESENTATION_ID"
    MISSING_VP_TOKEN: Final[str] = "MISSING_VP_TOKEN"
    API_REQUEST_FAILED: Final[str] = "API_REQUEST_FAILED"
    INVALID_RESPONSE: Final[str] = "INVALID_RESPONSE"
    SESSION_ERROR: Final[str] = "SESSION_ERROR"
    MISSING_EPHEMERAL_ECDH_PRIVATE_JWK: Final[str] = "MISSING_EPHEMERAL_ECDH_PRIVATE_JWK"


class GetWalletResponseError(ServiceError[GetWalletResponseErrorType]):
    """Error during wallet response retrieval"""

    service_name = "GetWalletResponse"

    @classmethod
    def kind_for(cls, error: BaseException) -> GetWalletResponseErrorType:
        if is_session_failure(error):
            return GetWalletResponseErrorType.SESSION_ERROR
        if is_malformed_data(error) or isinstance(error, MdocVerificationError):
            return GetWalletResponseErrorType.INVALID_RESPONSE
        return GetWalletResponseErrorType.API_REQUEST_FAILED


@dataclass(frozen=True)
class GetWalletResponseRequest:
    """
    Request to retrieve the wallet response of the session's transaction.

    Attributes:
        session: Session holding the transaction state
        response_code: Response code the wallet substituted into the redirect URI
    """

    session: Session
    response_code: Optional[ResponseCode] = None


class GetWalletResponse(ABC):
    """
    Use case: Retrieve the wallet response and verify the presented credential.

    Flow:
    1. Load presentation id from the session
    2. GET the wallet response from the backend
    3. Decrypt/verify the JARM payload with the ephemeral private key
    4. Verify the VP token as an MDOC
    5. Return the verification result
    """

    @abstractmethod
    async def execute(self, request: GetWalletResponseRequest) -> Result[VerificationResult, GetWalletResponseError]:
        """
        Execute the get wallet response use case.

        Args:
            request: Get wallet response request

        Returns:
            Success(VerificationResult) or Failure(GetWalletResponseError)
        """
        pass
