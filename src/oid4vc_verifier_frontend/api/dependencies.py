"""Dependency injection container for FastAPI"""

import logging
from typing import Any, Dict, List, Optional

from oid4vc_verifier_frontend.adapter import (
    HttpxClient,
    InMemorySessionStore,
    JoserfcEphemeralKeyGenerator,
    JoserfcJarmVerifier,
    QrCodeServiceImpl,
    StubMdocVerifier,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
    default_is_mobile,
    mdl_presentation_definition,
)
from oid4vc_verifier_frontend.application import GetWalletResponseImpl, InitTransactionImpl
from oid4vc_verifier_frontend.config import load_or_create_config, load_wallet_jwks_from_env
from oid4vc_verifier_frontend.domain import FrontendConfig, is_signed
from oid4vc_verifier_frontend.port.input import GetWalletResponse, InitTransaction
from oid4vc_verifier_frontend.port.output import (
    EphemeralKeyGenerator,
    HttpClient,
    JarmVerifier,
    MdocVerifier,
    QrCodeService,
)

log = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency injection container for the verifier frontend.

    Manages singleton instances of adapters and use cases. Any adapter can be
    supplied up front, which is how tests swap in fakes.
    """

    def __init__(
        self,
        config: Optional[FrontendConfig] = None,
        http_client: Optional[HttpClient] = None,
        mdoc_verifier: Optional[MdocVerifier] = None,
        wallet_verification_jwks: Optional[List[Dict[str, Any]]] = None,
        consume_session: bool = False,
    ):
        """
        Initialize container with optional configuration.

        Args:
            config: Frontend configuration (if None, loaded from environment)
            http_client: Backend HTTP client (if None, HttpxClient)
            mdoc_verifier: MDOC verifier (if None, StubMdocVerifier)
            wallet_verification_jwks: Wallet keys for signed JARM (if None, loaded from environment)
            consume_session: Delete transaction data once a result is produced
        """
        self._config = config
        self._http_client = http_client
        self._mdoc_verifier = mdoc_verifier
        self._wallet_verification_jwks = wallet_verification_jwks
        self._consume_session = consume_session
        self._session_store: Optional[InMemorySessionStore] = None
        self._key_generator: Optional[EphemeralKeyGenerator] = None
        self._jarm_verifier: Optional[JarmVerifier] = None
        self._qrcode_service: Optional[QrCodeService] = None
        self._init_transaction: Optional[InitTransaction] = None
        self._get_wallet_response: Optional[GetWalletResponse] = None

    def get_config(self) -> FrontendConfig:
        """Get frontend configuration"""
        if self._config is None:
            self._config = load_or_create_config()
        return self._config

    def get_session_store(self) -> InMemorySessionStore:
        """Get session store (singleton)"""
        if self._session_store is None:
            self._session_store = InMemorySessionStore(ttl_seconds=self.get_config().session_ttl_seconds)
        return self._session_store

    def get_http_client(self) -> HttpClient:
        """Get backend HTTP client (singleton)"""
        if self._http_client is None:
            self._http_client = HttpxClient(timeout=self.get_config().request_timeout_seconds)
        return self._http_client

    def get_key_generator(self) -> EphemeralKeyGenerator:
        if self._key_generator is None:
            self._key_generator = JoserfcEphemeralKeyGenerator(
                algorithm=self.get_config().authorization_encrypted_response_alg
            )
        return self._key_generator

    def get_jarm_verifier(self) -> JarmVerifier:
        if self._jarm_verifier is None:
            jwks = self._wallet_verification_jwks
            if jwks is None:
                jwks = load_wallet_jwks_from_env()
            if not jwks and is_signed(self.get_config().jarm_option()):
                log.warning("Signed JARM is configured but no wallet keys are loaded, wallet responses will be rejected")
            self._jarm_verifier = JoserfcJarmVerifier(wallet_verification_jwks=jwks)
        return self._jarm_verifier

    def get_mdoc_verifier(self) -> MdocVerifier:
        if self._mdoc_verifier is None:
            self._mdoc_verifier = StubMdocVerifier()
        return self._mdoc_verifier

    def get_qrcode_service(self) -> QrCodeService:
        """Get QR code service (singleton)"""
        if self._qrcode_service is None:
            self._qrcode_service = QrCodeServiceImpl()
        return self._qrcode_service

    def get_init_transaction(self) -> InitTransaction:
        """Get InitTransaction use case (singleton)"""
        if self._init_transaction is None:
            self._init_transaction = InitTransactionImpl(
                config=self.get_config(),
                http_client=self.get_http_client(),
                ephemeral_key_generator=self.get_key_generator(),
                generate_nonce=default_generate_nonce,
                generate_presentation_definition=mdl_presentation_definition,
                generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
                generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
                is_mobile=default_is_mobile,
            )
        return self._init_transaction

    def get_get_wallet_response(self) -> GetWalletResponse:
        """Get GetWalletResponse use case (singleton)"""
        if self._get_wallet_response is None:
            self._get_wallet_response = GetWalletResponseImpl(
                config=self.get_config(),
                http_client=self.get_http_client(),
                jarm_verifier=self.get_jarm_verifier(),
                mdoc_verifier=self.get_mdoc_verifier(),
                consume_session=self._consume_session,
            )
        return self._get_wallet_response


# Global container instance
_container: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get or create global dependency container"""
    global _container
    if _container is None:
        _container = DependencyContainer()
    return _container


def set_container(container: DependencyContainer) -> None:
    """Set global dependency container (useful for testing)"""
    global _container
    _container = container


# FastAPI dependency functions
def get_init_transaction_use_case() -> InitTransaction:
    """FastAPI dependency for InitTransaction use case"""
    return get_container().get_init_transaction()


def get_get_wallet_response_use_case() -> GetWalletResponse:
    """FastAPI dependency for GetWalletResponse use case"""
    return get_container().get_get_wallet_response()


def get_session_store() -> InMemorySessionStore:
    """FastAPI dependency for the session store"""
    return get_container().get_session_store()


def get_qrcode_service() -> QrCodeService:
    """FastAPI dependency for QrCodeService"""
    return get_container().get_qrcode_service()


def get_frontend_config() -> FrontendConfig:
    """FastAPI dependency for FrontendConfig"""
    return get_container().get_config()
