"""Init transaction use case - Start a presentation transaction with the backend"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Final, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from returns.result import Result

from oid4vc_verifier_frontend.domain import (
    JarMode,
    PresentationDefinitionMode,
    PresentationId,
    PresentationType,
    ResponseMode,
)
from oid4vc_verifier_frontend.port.input.errors import (
    ServiceError,
    is_malformed_data,
    is_session_failure,
)
from oid4vc_verifier_frontend.port.output import Session

USER_AGENT_HEADER: Final[str] = "user-agent"


class InitTransactionErrorType(str, Enum):
    """Error kinds of the init transaction use case"""

    MISSING_USER_AGENT: Final[str] = "MISSING_USER_AGENT"
    API_REQUEST_FAILED: Final[str] = "API_REQUEST_FAILED"
    INVALID_RESPONSE: Final[str] = "INVALID_RESPONSE"
    SESSION_ERROR: Final[str] = "SESSION_ERROR"


class InitTransactionError(ServiceError[InitTransactionErrorType]):
    """Error during transaction initialization"""

    service_name = "InitTransaction"

    @classmethod
    def kind_for(cls, error: BaseException) -> InitTransactionErrorType:
        if is_session_failure(error):
            return InitTransactionErrorType.SESSION_ERROR
        if is_malformed_data(error):
            return InitTransactionErrorType.INVALID_RESPONSE
        return InitTransactionErrorType.API_REQUEST_FAILED


@dataclass(frozen=True)
class InitTransactionRequest:
    """
    Inbound request that starts a transaction.

    Attributes:
        headers: Request headers (used for the user agent)
        session: Session of the user starting the transaction
    """

    headers: Mapping[str, str]
    session: Session

    def user_agent(self) -> Optional[str]:
        """User-Agent header value, looked up case-insensitively"""
        for name, value in self.headers.items():
            if name.lower() == USER_AGENT_HEADER:
                return value
        return None


@dataclass(frozen=True)
class InitTransactionResult:
    """
    Outcome of a successful initialization.

    Attributes:
        wallet_redirect_uri: URI that opens the wallet (redirect on mobile, QR code on desktop)
        is_mobile: Whether the user agent was classified as a mobile phone
    """

    wallet_redirect_uri: str
    is_mobile: bool


class InitTransactionRequestJSON(BaseModel):
    """Body POSTed to the backend's init transaction endpoint"""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    type: PresentationType
    presentation_definition: Dict[str, Any]
    nonce: str = Field(..., min_length=1)
    response_mode: Optional[ResponseMode] = None
    jar_mode: Optional[JarMode] = None
    presentation_definition_mode: Optional[PresentationDefinitionMode] = None
    ephemeral_ecdh_public_jwk: str = Field(..., min_length=1)
    wallet_response_redirect_uri_template: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        """JSON body with absent optional fields omitted"""
        return self.model_dump(mode="json", exclude_none=True)


class InitTransactionResponse(BaseModel):
    """Backend's answer to transaction initialization"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    presentation_id: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    request: Optional[str] = None
    request_uri: Optional[str] = None

    @field_validator("presentation_id", "client_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be blank")
        return v

    def presentation_id_value(self) -> PresentationId:
        return PresentationId(value=self.presentation_id)

    def to_wallet_redirect_params(self) -> Dict[str, str]:
        """Query parameters for the wallet redirect URI"""
        params = {"client_id": self.client_id}
        if self.request is not None:
            params["request"] = self.request
        if self.request_uri is not None:
            params["request_uri"] = self.request_uri
        return params


class InitTransaction(ABC):
    """
    Use case: Initialize a new presentation transaction.

    Flow:
    1. Read the user agent and classify the device
    2. Generate nonce and ephemeral ECDH key pair
    3. POST the presentation request to the backend
    4. Store presentation id, nonce and private key in the session
    5. Return the wallet redirect URI
    """

    @abstractmethod
    async def execute(self, request: InitTransactionRequest) -> Result[InitTransactionResult, InitTransactionError]:
        """
        Execute the init transaction use case.

        Args:
            request: Init transaction request

        Returns:
            Success(InitTransactionResult) or Failure(InitTransactionError)
        """
        pass
