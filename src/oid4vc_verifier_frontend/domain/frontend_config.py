"""Verifier frontend configuration

This module defines the configuration shared by both transaction phases:

- Verifier backend endpoints (init transaction, wallet response)
- Public URL of this frontend and the wallet URL
- Wallet response redirect path and placeholder template
- Presentation request options (token type, response/JAR/definition modes)
- JARM client metadata, from which the JarmOption is derived

All configuration is immutable and validated.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from oid4vc_verifier_frontend.domain.jarm_option import JarmOption, parse_jarm_option
from oid4vc_verifier_frontend.domain.value_objects import (
    JarMode,
    PresentationDefinitionMode,
    PresentationType,
    ResponseMode,
)

DEFAULT_RESPONSE_CODE_PLACEHOLDER = "{RESPONSE_CODE}"


def _with_extra_path(base: str, additional_path: Optional[str]) -> str:
    return f"{base}/{additional_path}" if additional_path else base


class FrontendConfig(BaseModel):
    """
    Complete verifier frontend configuration.

    Attributes:
        api_base_url: Base URL of the verifier backend
        init_transaction_api_path: Backend path for transaction initialization
        get_wallet_response_api_path: Backend path prefix for wallet responses
        public_url: Public URL of this frontend
        wallet_url: URL the user is redirected to in order to open the wallet
        wallet_response_redirect_path: Path the wallet redirects back to (mobile flow)
        wallet_response_redirect_query_template: Placeholder substituted by the wallet
        token_type: Requested token type
        response_mode: Optional response mode sent to the backend
        jar_mode: Optional JAR mode sent to the backend
        presentation_definition_mode: Optional presentation definition mode
        authorization_signed_response_alg: JARM signing algorithm
        authorization_encrypted_response_alg: JARM key management algorithm
        authorization_encrypted_response_enc: JARM content encryption method
        request_timeout_seconds: Timeout applied by the HTTP adapter
        session_ttl_seconds: Idle time after which the in-memory session store evicts a session
        home_view_path: Path of the home view
    """

    model_config = ConfigDict(frozen=True)

    api_base_url: str = Field(..., description="Verifier backend base URL")
    init_transaction_api_path: str = Field("/ui/presentations", description="Init transaction API path")
    get_wallet_response_api_path: str = Field("/ui/presentations", description="Wallet response API path prefix")
    public_url: str = Field(..., description="Public URL of the frontend")
    wallet_url: str = Field(..., description="Wallet URL")
    wallet_response_redirect_path: str = Field("/result", description="Wallet response redirect path")
    wallet_response_redirect_query_template: str = Field(
        DEFAULT_RESPONSE_CODE_PLACEHOLDER, description="Response code placeholder"
    )
    token_type: PresentationType = Field(PresentationType.VP_TOKEN, description="Requested token type")
    response_mode: Optional[ResponseMode] = Field(None, description="Response mode")
    jar_mode: Optional[JarMode] = Field(None, description="JAR mode")
    presentation_definition_mode: Optional[PresentationDefinitionMode] = Field(
        None, description="Presentation definition mode"
    )
    authorization_signed_response_alg: Optional[str] = Field(None, description="JARM signing algorithm")
    authorization_encrypted_response_alg: Optional[str] = Field(
        "ECDH-ES+A256KW", description="JARM key management algorithm"
    )
    authorization_encrypted_response_enc: Optional[str] = Field("A256GCM", description="JARM encryption method")
    request_timeout_seconds: float = Field(10.0, gt=0, le=120, description="HTTP request timeout (seconds)")
    session_ttl_seconds: float = Field(900.0, gt=0, description="Idle time before a session is evicted (seconds)")
    home_view_path: str = Field("/home", description="Home view path")

    @field_validator("api_base_url", "public_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate URL format"""
        if not v.startswith("https://") and not v.startswith("http://localhost"):
            raise ValueError("URL must be HTTPS (or http://localhost for dev)")
        return v.rstrip("/")

    @field_validator("wallet_url")
    @classmethod
    def validate_wallet_url(cls, v: str) -> str:
        """Wallet URL may use a custom scheme such as openid4vp://"""
        if "://" not in v:
            raise ValueError("wallet_url must be an absolute URL")
        return v

    @field_validator(
        "init_transaction_api_path",
        "get_wallet_response_api_path",
        "wallet_response_redirect_path",
        "home_view_path",
    )
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Paths are absolute"""
        if not v or not v.startswith("/"):
            raise ValueError("Path must start with '/'")
        return v

    @field_validator("wallet_response_redirect_query_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("wallet_response_redirect_query_template cannot be blank")
        return v

    @model_validator(mode="after")
    def validate_jarm_metadata(self) -> "FrontendConfig":
        """Ensure the JARM metadata describes a usable option"""
        if self.jarm_option() is None:
            raise ValueError(
                "At least one of authorization_signed_response_alg or "
                "authorization_encrypted_response_alg/enc must be configured"
            )
        return self

    def jarm_option(self) -> Optional[JarmOption]:
        """JarmOption derived from the authorization response metadata"""
        return parse_jarm_option(
            self.authorization_signed_response_alg,
            self.authorization_encrypted_response_alg,
            self.authorization_encrypted_response_enc,
        )

    def init_transaction_view_path(self, additional_path: Optional[str] = None) -> str:
        return _with_extra_path("/init", additional_path)

    def result_view_path(self, additional_path: Optional[str] = None) -> str:
        return _with_extra_path("/result", additional_path)
