"""MDOC verification results"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MdocDocument(BaseModel):
    """
    A document disclosed in an MDOC DeviceResponse.

    Attributes:
        doc_type: Document type (org.iso.18013.5.1.mDL, ...)
        claims: Disclosed elements grouped by namespace
    """

    model_config = ConfigDict(frozen=True)

    doc_type: str
    claims: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class MdocVerifyResult(BaseModel):
    """Outcome reported by the MDOC verifier"""

    model_config = ConfigDict(frozen=True)

    valid: bool
    documents: List[MdocDocument] = Field(default_factory=list)


class VerificationResult(BaseModel):
    """
    Final output of the wallet response phase.

    A negative MDOC verification (valid=False) is a legitimate result, not an error.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    documents: List[MdocDocument] = Field(default_factory=list)
    vp_token: Optional[str] = None

    @classmethod
    def from_mdoc_result(cls, result: MdocVerifyResult, vp_token: str) -> "VerificationResult":
        return cls(valid=result.valid, documents=list(result.documents), vp_token=vp_token)
