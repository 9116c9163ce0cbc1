"""Input ports - Use case interfaces"""

from oid4vc_verifier_frontend.port.input.errors import ServiceError
from oid4vc_verifier_frontend.port.input.init_transaction import (
    InitTransaction,
    InitTransactionError,
    InitTransactionErrorType,
    InitTransactionRequest,
    InitTransactionRequestJSON,
    InitTransactionResponse,
    InitTransactionResult,
)
from oid4vc_verifier_frontend.port.input.get_wallet_response import (
    GetWalletResponse,
    GetWalletResponseError,
    GetWalletResponseErrorType,
    GetWalletResponseRequest,
)

__all__ = [
    "ServiceError",
    # Init Transaction
    "InitTransaction",
    "InitTransactionRequest",
    "InitTransactionRequestJSON",
    "InitTransactionResponse",
    "InitTransactionResult",
    "InitTransactionError",
    "InitTransactionErrorType",
    # Get Wallet Response
    "GetWalletResponse",
    "GetWalletResponseRequest",
    "GetWalletResponseError",
    "GetWalletResponseErrorType",
]
