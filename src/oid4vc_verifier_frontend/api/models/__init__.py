"""API models - Response DTOs"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class InitTransactionResponseModel(BaseModel):
    """Response from transaction initialization"""

    wallet_redirect_uri: str = Field(..., description="URI that opens the wallet")
    is_mobile: bool = Field(..., description="Whether the client was classified as a mobile phone")
    qr_code_svg: Optional[str] = Field(None, description="QR code of the wallet redirect URI (desktop only)")


class MdocDocumentModel(BaseModel):
    doc_type: str = Field(..., description="Document type")
    claims: Dict[str, Dict[str, Any]] = Field(default_factory=dict, description="Disclosed elements by namespace")


class VerificationResultModel(BaseModel):
    """Response from wallet response retrieval"""

    valid: bool = Field(..., description="Whether the presented credential verified")
    documents: List[MdocDocumentModel] = Field(default_factory=list, description="Disclosed documents")
    vp_token: Optional[str] = Field(None, description="VP token as received")


class ErrorResponseModel(BaseModel):
    """Standard error response"""

    error: str = Field(..., description="Error code")
    error_description: str = Field(..., description="Human-readable error description")
