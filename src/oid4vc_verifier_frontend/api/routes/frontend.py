"""Verifier frontend endpoints"""

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from returns.result import Failure

from oid4vc_verifier_frontend.adapter import InMemorySessionStore
from oid4vc_verifier_frontend.api.dependencies import (
    get_get_wallet_response_use_case,
    get_init_transaction_use_case,
    get_qrcode_service,
    get_session_store,
)
from oid4vc_verifier_frontend.api.models import (
    ErrorResponseModel,
    InitTransactionResponseModel,
    MdocDocumentModel,
    VerificationResultModel,
)
from oid4vc_verifier_frontend.domain import ResponseCode
from oid4vc_verifier_frontend.port.input import (
    GetWalletResponse,
    GetWalletResponseErrorType,
    GetWalletResponseRequest,
    InitTransaction,
    InitTransactionErrorType,
    InitTransactionRequest,
    ServiceError,
)
from oid4vc_verifier_frontend.port.output import QrCodeFormat, QrCodeService

log = logging.getLogger(__name__)

SESSION_COOKIE = "vf_session"

INIT_TRANSACTION_STATUS: Dict[InitTransactionErrorType, int] = {
    InitTransactionErrorType.MISSING_USER_AGENT: 400,
    InitTransactionErrorType.API_REQUEST_FAILED: 502,
    InitTransactionErrorType.INVALID_RESPONSE: 502,
    InitTransactionErrorType.SESSION_ERROR: 500,
}

GET_WALLET_RESPONSE_STATUS: Dict[GetWalletResponseErrorType, int] = {
    GetWalletResponseErrorType.MISSING_PRESENTATION_ID: 400,
    GetWalletResponseErrorType.MISSING_EPHEMERAL_ECDH_PRIVATE_JWK: 400,
    GetWalletResponseErrorType.MISSING_VP_TOKEN: 502,
    GetWalletResponseErrorType.API_REQUEST_FAILED: 502,
    GetWalletResponseErrorType.INVALID_RESPONSE: 502,
    GetWalletResponseErrorType.SESSION_ERROR: 500,
}

router = APIRouter(tags=["Verifier Frontend"])


def error_response(status_code: int, error: ServiceError) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponseModel(
            error=error.error_type.value.lower(),
            error_description=str(error),
        ).model_dump(),
    )


@router.post(
    "/init",
    response_model=InitTransactionResponseModel,
    status_code=201,
    summary="Initialize presentation transaction",
    description="Start a transaction with the verifier backend and return the wallet redirect URI",
)
async def init_transaction(
    request: Request,
    response: Response,
    init_transaction_uc: InitTransaction = Depends(get_init_transaction_use_case),
    session_store: InMemorySessionStore = Depends(get_session_store),
    qrcode_service: QrCodeService = Depends(get_qrcode_service),
) -> InitTransactionResponseModel:
    """
    Initialize a new presentation transaction.

    Every call starts a new transaction in a new session. On desktop the
    wallet redirect URI is also rendered as an SVG QR code.
    """
    session_id = session_store.new_session_id()
    session = session_store.session(session_id)

    result = await init_transaction_uc.execute(InitTransactionRequest(headers=request.headers, session=session))

    if isinstance(result, Failure):
        session_store.discard(session_id)
        error = result.failure()
        raise error_response(INIT_TRANSACTION_STATUS[error.error_type], error)

    init_result = result.unwrap()

    qr_code_svg: Optional[str] = None
    if not init_result.is_mobile:
        qr_result = await qrcode_service.generate_qr_code(init_result.wallet_redirect_uri, QrCodeFormat.SVG)
        if isinstance(qr_result, Failure):
            log.warning("QR code generation failed: %s", qr_result.failure())
        else:
            qr_code_svg = qr_result.unwrap().decode("utf-8")

    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax", secure=request.url.scheme == "https")

    return InitTransactionResponseModel(
        wallet_redirect_uri=init_result.wallet_redirect_uri,
        is_mobile=init_result.is_mobile,
        qr_code_svg=qr_code_svg,
    )


@router.get(
    "/result",
    response_model=VerificationResultModel,
    summary="Get verification result",
    description="Retrieve the wallet response of the session's transaction and verify it",
)
async def get_wallet_response(
    request: Request,
    response_code: Optional[str] = Query(None, description="Response code from the wallet redirect"),
    get_wallet_response_uc: GetWalletResponse = Depends(get_get_wallet_response_use_case),
    session_store: InMemorySessionStore = Depends(get_session_store),
) -> VerificationResultModel:
    """
    Get the verification result of the current transaction.

    On mobile the wallet redirects here with a response_code; on desktop the
    page polls without one.
    """
    try:
        rc = ResponseCode(value=response_code) if response_code is not None else None
    except ValueError as e:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponseModel(error="invalid_request", error_description=f"Invalid request: {e}").model_dump(),
        )

    session = session_store.lookup(request.cookies.get(SESSION_COOKIE))
    result = await get_wallet_response_uc.execute(GetWalletResponseRequest(session=session, response_code=rc))

    if isinstance(result, Failure):
        error = result.failure()
        raise error_response(GET_WALLET_RESPONSE_STATUS[error.error_type], error)

    verification = result.unwrap()
    return VerificationResultModel(
        valid=verification.valid,
        documents=[MdocDocumentModel(doc_type=d.doc_type, claims=d.claims) for d in verification.documents],
        vp_token=verification.vp_token,
    )
