"""InitTransaction use case implementation"""

import logging
from typing import Any, Dict, List, Optional

from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.domain import (
    EphemeralECDHPrivateJwk,
    EphemeralECDHPublicJwk,
    FrontendConfig,
    Nonce,
    PresentationId,
)
from oid4vc_verifier_frontend.port.input import (
    InitTransaction,
    InitTransactionError,
    InitTransactionErrorType,
    InitTransactionRequest,
    InitTransactionRequestJSON,
    InitTransactionResponse,
    InitTransactionResult,
)
from oid4vc_verifier_frontend.port.output import (
    EphemeralKeyGenerator,
    GenerateNonce,
    GeneratePresentationDefinition,
    GenerateWalletRedirectUri,
    GenerateWalletResponseRedirectUriTemplate,
    HttpClient,
    IsMobile,
    TRANSACTION_KEYS,
    Session,
    SessionKey,
)

log = logging.getLogger(__name__)


def generate_request(
    config: FrontendConfig,
    is_mobile: bool,
    nonce: Nonce,
    ephemeral_ecdh_public_jwk: EphemeralECDHPublicJwk,
    generate_presentation_definition: GeneratePresentationDefinition,
    generate_wallet_response_redirect_uri_template: GenerateWalletResponseRedirectUriTemplate,
) -> InitTransactionRequestJSON:
    """
    Build the body of the init transaction request.

    The wallet response redirect URI template is only sent for mobile clients:
    on desktop the wallet runs on another device and cannot redirect back.

    Args:
        config: Frontend configuration
        is_mobile: Whether the client is a mobile phone
        nonce: Transaction nonce
        ephemeral_ecdh_public_jwk: Public half of the ephemeral key
        generate_presentation_definition: Presentation definition generator
        generate_wallet_response_redirect_uri_template: Redirect URI template generator

    Returns:
        InitTransactionRequestJSON

    Raises:
        InitTransactionError: INVALID_RESPONSE if URL parameters are missing
    """
    if (
        not config.public_url
        or not config.wallet_response_redirect_path
        or not config.wallet_response_redirect_query_template
    ):
        raise InitTransactionError(InitTransactionErrorType.INVALID_RESPONSE, "Required URL parameters are missing")

    redirect_uri_template: Optional[str] = None
    if is_mobile:
        redirect_uri_template = generate_wallet_response_redirect_uri_template(
            config.public_url,
            config.wallet_response_redirect_path,
            config.wallet_response_redirect_query_template,
        )

    return InitTransactionRequestJSON(
        type=config.token_type,
        presentation_definition=generate_presentation_definition(),
        nonce=nonce.value,
        response_mode=config.response_mode,
        jar_mode=config.jar_mode,
        presentation_definition_mode=config.presentation_definition_mode,
        ephemeral_ecdh_public_jwk=ephemeral_ecdh_public_jwk.to_json(),
        wallet_response_redirect_uri_template=redirect_uri_template,
    )


async def store_transaction_in_session(
    session: Session,
    presentation_id: PresentationId,
    nonce: Nonce,
    ephemeral_ecdh_private_jwk: EphemeralECDHPrivateJwk,
) -> None:
    """
    Store the transaction state in the session.

    Slots are written in order presentation id, nonce, private key. If a write
    fails, the slots already written get their previous values back (or are
    removed if they had none), so the session never mixes two transactions.

    Raises:
        InitTransactionError: SESSION_ERROR if the session cannot be read or a write fails
    """
    try:
        snapshot = await session.get_batch(*TRANSACTION_KEYS)
    except Exception as e:
        snapshot = Failure(e)
    if isinstance(snapshot, Failure):
        raise InitTransactionError(
            InitTransactionErrorType.SESSION_ERROR,
            "Failed to read session before storing transaction data",
            snapshot.failure(),
        )
    previous = snapshot.unwrap()

    writes = [
        (SessionKey.PRESENTATION_ID, presentation_id),
        (SessionKey.NONCE, nonce),
        (SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK, ephemeral_ecdh_private_jwk.to_json()),
    ]
    written: List[SessionKey] = []

    for key, value in writes:
        try:
            result = await session.set(key, value)
        except Exception as e:
            result = Failure(e)

        if isinstance(result, Failure):
            error = result.failure()
            log.error("Failed to store '%s' in session: %s", key.value, error)
            await _rollback(session, written, previous)
            raise InitTransactionError(
                InitTransactionErrorType.SESSION_ERROR,
                "Failed to store transaction data in session",
                error,
            )
        written.append(key)


async def _rollback(session: Session, written: List[SessionKey], previous: Dict[SessionKey, Any]) -> None:
    restore = {key: previous[key] for key in written if key in previous}
    remove = [key for key in written if key not in previous]
    try:
        if remove:
            result = await session.delete_batch(*remove)
            if isinstance(result, Failure):
                raise result.failure()
        if restore:
            result = await session.set_batch(restore)
            if isinstance(result, Failure):
                raise result.failure()
    except Exception as e:
        log.warning("Could not roll back partial session write: %s", e)


class InitTransactionImpl(InitTransaction):
    """
    Implementation of InitTransaction use case.

    Sends exactly one request to the backend and performs one logical session
    write per transaction. Nothing is retried.
    """

    def __init__(
        self,
        config: FrontendConfig,
        http_client: HttpClient,
        ephemeral_key_generator: EphemeralKeyGenerator,
        generate_nonce: GenerateNonce,
        generate_presentation_definition: GeneratePresentationDefinition,
        generate_wallet_response_redirect_uri_template: GenerateWalletResponseRedirectUriTemplate,
        generate_wallet_redirect_uri: GenerateWalletRedirectUri,
        is_mobile: IsMobile,
    ):
        if not config.api_base_url or not config.init_transaction_api_path or not config.wallet_url:
            raise InitTransactionError(
                InitTransactionErrorType.INVALID_RESPONSE, "Required configuration parameters are missing"
            )
        self.config = config
        self.http_client = http_client
        self.ephemeral_key_generator = ephemeral_key_generator
        self.generate_nonce = generate_nonce
        self.generate_presentation_definition = generate_presentation_definition
        self.generate_wallet_response_redirect_uri_template = generate_wallet_response_redirect_uri_template
        self.generate_wallet_redirect_uri = generate_wallet_redirect_uri
        self.is_mobile = is_mobile

    async def execute(self, request: InitTransactionRequest) -> Result[InitTransactionResult, InitTransactionError]:
        """
        Execute the init transaction use case.

        Flow:
        1. Validate user agent and classify device
        2. Generate nonce
        3. Generate ephemeral key, derive public key
        4. Build request body
        5. POST to backend
        6. Parse backend response
        7. Store transaction in session
        8. Build wallet redirect URI
        """
        try:
            user_agent = self._validate_user_agent(request)
            is_mobile = self.is_mobile(user_agent)

            nonce = self.generate_nonce()

            key_result = await self.ephemeral_key_generator.generate()
            if isinstance(key_result, Failure):
                raise InitTransactionError(
                    InitTransactionErrorType.API_REQUEST_FAILED,
                    "Failed to generate ephemeral ECDH key",
                    key_result.failure(),
                )
            ephemeral_private_jwk = key_result.unwrap()
            ephemeral_public_jwk = ephemeral_private_jwk.derive_public()

            body = generate_request(
                config=self.config,
                is_mobile=is_mobile,
                nonce=nonce,
                ephemeral_ecdh_public_jwk=ephemeral_public_jwk,
                generate_presentation_definition=self.generate_presentation_definition,
                generate_wallet_response_redirect_uri_template=self.generate_wallet_response_redirect_uri_template,
            )

            log.debug("Sending init transaction request (mobile=%s)", is_mobile)
            post_result = await self.http_client.post(
                self.config.api_base_url,
                self.config.init_transaction_api_path,
                body.to_wire(),
                InitTransactionResponse,
            )
            if isinstance(post_result, Failure):
                raise InitTransactionError(
                    InitTransactionErrorType.API_REQUEST_FAILED,
                    "Failed to communicate with InitTransaction API",
                    post_result.failure(),
                )

            try:
                response = InitTransactionResponse.model_validate(post_result.unwrap().data)
                presentation_id = response.presentation_id_value()
            except Exception as e:
                raise InitTransactionError(
                    InitTransactionErrorType.INVALID_RESPONSE,
                    "Failed to parse InitTransaction API response",
                    e,
                )

            await store_transaction_in_session(request.session, presentation_id, nonce, ephemeral_private_jwk)

            try:
                wallet_redirect_uri = self.generate_wallet_redirect_uri(
                    self.config.wallet_url, response.to_wallet_redirect_params()
                )
            except Exception as e:
                raise InitTransactionError(
                    InitTransactionErrorType.INVALID_RESPONSE,
                    "Failed to generate wallet redirect URI",
                    e,
                )

            log.info("Transaction initialized: presentation_id=%s", presentation_id)
            return Success(InitTransactionResult(wallet_redirect_uri=wallet_redirect_uri, is_mobile=is_mobile))

        except InitTransactionError as e:
            log.warning("Init transaction failed: %s", e)
            return Failure(e)
        except Exception as e:
            log.exception("Unexpected error during transaction initialization")
            return Failure(InitTransactionError.wrap(e, "Unexpected error during transaction initialization"))

    def _validate_user_agent(self, request: InitTransactionRequest) -> str:
        """User agent of the request, required to pick the wallet hand-off flow"""
        user_agent = request.user_agent()
        if not user_agent or not user_agent.strip():
            raise InitTransactionError(
                InitTransactionErrorType.MISSING_USER_AGENT,
                "User agent header is required to determine device type",
            )
        return user_agent
