"""Wallet response models

This module defines what comes back from the wallet, through the verifier
backend, in the second phase of a transaction:

- WalletResponseEnvelope: the backend's answer, holding the JARM-protected payload
- AuthorizationResponse: the verified/decrypted content of that payload
- PresentationSubmission: DIF Presentation Exchange submission descriptor

Wire names are snake_case. Models are immutable.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PresentationSubmission(BaseModel):
    """
    Presentation submission descriptor.

    Maps vp_token contents to presentation definition requirements.
    Follows DIF Presentation Exchange 2.0.

    Attributes:
        id: Unique submission identifier
        definition_id: ID of the presentation definition being satisfied
        descriptor_map: Mapping of inputs to credentials
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Submission identifier")
    definition_id: str = Field(..., min_length=1, description="Presentation definition ID")
    descriptor_map: List[Dict[str, Any]] = Field(default_factory=list, description="Input descriptor mapping")

    @field_validator("id", "definition_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Field cannot be blank")
        return v


class WalletResponseEnvelope(BaseModel):
    """
    Response of the backend's wallet-response endpoint.

    Attributes:
        state: State echoed by the wallet
        response: JARM-protected authorization response (JWS/JWE compact serialization)
    """

    model_config = ConfigDict(frozen=True)

    state: Optional[str] = Field(None, description="State parameter")
    response: str = Field(..., min_length=1, description="Protected authorization response")


class AuthorizationResponse(BaseModel):
    """
    Authorization response recovered from a JARM payload.

    Attributes:
        vp_token: Verifiable presentation token (DeviceResponse for MDOC)
        id_token: Self-issued ID token
        presentation_submission: Optional presentation submission descriptor
        state: State parameter echoed from the request
        error: Error code returned by the wallet
        error_description: Human-readable error description
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    vp_token: Optional[str] = None
    id_token: Optional[str] = None
    presentation_submission: Optional[PresentationSubmission] = None
    state: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None

    @field_validator("vp_token", "id_token", mode="before")
    @classmethod
    def blank_token_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "AuthorizationResponse":
        """Build from decoded JWT claims"""
        return cls.model_validate(claims)

    def is_error(self) -> bool:
        return self.error is not None
