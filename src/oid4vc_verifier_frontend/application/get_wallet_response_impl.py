"""GetWalletResponse use case implementation"""

import logging
from typing import Any, Dict, Mapping, Optional

from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.domain import (
    AuthorizationResponse,
    EphemeralECDHPrivateJwk,
    FrontendConfig,
    JarmOption,
    PresentationId,
    VerificationResult,
    WalletResponseEnvelope,
    describe_jarm_option,
)
from oid4vc_verifier_frontend.port.input import (
    GetWalletResponse,
    GetWalletResponseError,
    GetWalletResponseErrorType,
    GetWalletResponseRequest,
)
from oid4vc_verifier_frontend.port.output import (
    TRANSACTION_KEYS,
    HttpClient,
    JarmVerificationError,
    JarmVerifier,
    MdocVerifier,
    Session,
    SessionKey,
)

log = logging.getLogger(__name__)


async def read_transaction_from_session(session: Session) -> Dict[SessionKey, Any]:
    """
    Read all transaction slots of the session in one batch.

    Raises:
        GetWalletResponseError: SESSION_ERROR if the session cannot be read
    """
    result = await session.get_batch(*TRANSACTION_KEYS)
    if isinstance(result, Failure):
        raise GetWalletResponseError(
            GetWalletResponseErrorType.SESSION_ERROR,
            "Failed to read transaction data from session",
            result.failure(),
        )
    return result.unwrap()


async def get_presentation_id(session: Session, transaction: Mapping[SessionKey, Any]) -> PresentationId:
    """
    Presentation id of the current transaction.

    Raises:
        GetWalletResponseError: MISSING_PRESENTATION_ID if no transaction was initialized or it expired
    """
    presentation_id = transaction.get(SessionKey.PRESENTATION_ID)
    if presentation_id is None:
        keys_result = await session.keys()
        session_keys = [k.value for k in keys_result.unwrap()] if not isinstance(keys_result, Failure) else []
        log.error("Presentation ID not found in session (session keys: %s)", session_keys)
        raise GetWalletResponseError(
            GetWalletResponseErrorType.MISSING_PRESENTATION_ID,
            "Presentation ID not found in session. The session may have expired "
            "or the transaction was not properly initialized.",
        )

    return presentation_id


def get_ephemeral_private_jwk(transaction: Mapping[SessionKey, Any]) -> EphemeralECDHPrivateJwk:
    """
    Ephemeral private key of the current transaction.

    Raises:
        GetWalletResponseError: MISSING_EPHEMERAL_ECDH_PRIVATE_JWK if absent,
            SESSION_ERROR if the stored key cannot be decoded
    """
    serialized = transaction.get(SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK)
    if not serialized:
        raise GetWalletResponseError(
            GetWalletResponseErrorType.MISSING_EPHEMERAL_ECDH_PRIVATE_JWK,
            "Ephemeral ECDH private JWK not found in session",
        )

    try:
        return EphemeralECDHPrivateJwk.from_json(serialized)
    except ValueError as e:
        raise GetWalletResponseError(
            GetWalletResponseErrorType.SESSION_ERROR,
            "Ephemeral ECDH private JWK stored in session is invalid",
            e,
        )


def build_query(request: GetWalletResponseRequest) -> Dict[str, str]:
    """Query parameters for the wallet response request"""
    if request.response_code is None:
        return {}
    return {"response_code": request.response_code.value}


class GetWalletResponseImpl(GetWalletResponse):
    """
    Implementation of GetWalletResponse use case.

    Reads the session, fetches the protected response, verifies it and hands
    the VP token to the MDOC verifier. A negative MDOC result is returned as a
    normal result.

    When consume_session is enabled, the transaction slots are deleted once a
    verification result has been produced, making the ephemeral key single-use.
    """

    def __init__(
        self,
        config: FrontendConfig,
        http_client: HttpClient,
        jarm_verifier: JarmVerifier,
        mdoc_verifier: MdocVerifier,
        jarm_option: Optional[JarmOption] = None,
        consume_session: bool = False,
    ):
        jarm_option = jarm_option or config.jarm_option()
        if (
            not config.api_base_url
            or not config.get_wallet_response_api_path
            or jarm_verifier is None
            or mdoc_verifier is None
            or jarm_option is None
        ):
            raise GetWalletResponseError(
                GetWalletResponseErrorType.INVALID_RESPONSE, "Required configuration parameters are missing"
            )
        self.config = config
        self.http_client = http_client
        self.jarm_verifier = jarm_verifier
        self.mdoc_verifier = mdoc_verifier
        self.jarm_option = jarm_option
        self.consume_session = consume_session

    async def execute(self, request: GetWalletResponseRequest) -> Result[VerificationResult, GetWalletResponseError]:
        """
        Execute the get wallet response use case.

        Flow:
        1. Load transaction from session, require a presentation id
        2. GET wallet response from backend
        3. Parse response envelope
        4. Require the ephemeral private key
        5. Verify JARM payload
        6. Require a VP token
        7. Verify VP token as MDOC
        """
        try:
            transaction = await read_transaction_from_session(request.session)
            presentation_id = await get_presentation_id(request.session, transaction)

            path = f"{self.config.get_wallet_response_api_path}/{presentation_id}"
            get_result = await self.http_client.get(
                self.config.api_base_url, path, build_query(request), WalletResponseEnvelope
            )
            if isinstance(get_result, Failure):
                raise GetWalletResponseError(
                    GetWalletResponseErrorType.API_REQUEST_FAILED,
                    "Failed to communicate with GetWalletResponse API",
                    get_result.failure(),
                )

            try:
                envelope = WalletResponseEnvelope.model_validate(get_result.unwrap().data)
            except Exception as e:
                raise GetWalletResponseError(
                    GetWalletResponseErrorType.INVALID_RESPONSE,
                    "Failed to parse GetWalletResponse API response",
                    e,
                )

            private_jwk = get_ephemeral_private_jwk(transaction)

            authorization_response, jarm_failure = await self._verify_jarm(private_jwk, envelope.response)

            vp_token = authorization_response.vp_token if authorization_response else None
            if not vp_token:
                # TODO: support id_token-only responses once a verifier for them exists
                raise GetWalletResponseError(
                    GetWalletResponseErrorType.MISSING_VP_TOKEN,
                    "VP token is required for MDOC verification but was not found in the wallet response",
                    jarm_failure,
                )

            try:
                mdoc_result = await self.mdoc_verifier.verify(vp_token)
            except Exception as e:
                raise GetWalletResponseError(
                    GetWalletResponseErrorType.INVALID_RESPONSE,
                    "MDOC verification failed due to technical error",
                    e,
                )

            if not mdoc_result.valid:
                log.info("MDOC verification returned a negative result for presentation_id=%s", presentation_id)

            if self.consume_session:
                await self._consume(request.session)

            return Success(VerificationResult.from_mdoc_result(mdoc_result, vp_token))

        except GetWalletResponseError as e:
            log.warning("Get wallet response failed: %s", e)
            return Failure(e)
        except Exception as e:
            log.exception("Unexpected error during wallet response retrieval")
            return Failure(GetWalletResponseError.wrap(e, "Unexpected error during wallet response retrieval"))

    async def _verify_jarm(
        self, private_jwk: EphemeralECDHPrivateJwk, response: str
    ) -> tuple[Optional[AuthorizationResponse], Optional[JarmVerificationError]]:
        """
        Verify the JARM payload.

        A verification failure is logged and returned alongside an empty
        response; the caller decides whether the outcome is usable.
        """
        result = await self.jarm_verifier.verify(self.jarm_option, private_jwk, response)
        if isinstance(result, Failure):
            failure = result.failure()
            log.error("JARM verification failed (%s): %s", describe_jarm_option(self.jarm_option), failure)
            return None, failure
        return result.unwrap(), None

    async def _consume(self, session: Session) -> None:
        result = await session.delete_batch(*TRANSACTION_KEYS)
        if isinstance(result, Failure):
            raise GetWalletResponseError(
                GetWalletResponseErrorType.SESSION_ERROR,
                "Failed to remove transaction data from session",
                result.failure(),
            )
