"""Application layer - Use case implementations

This layer contains the transaction orchestration that drives domain objects
and talks to external collaborators through ports.
"""

from oid4vc_verifier_frontend.application.init_transaction_impl import InitTransactionImpl
from oid4vc_verifier_frontend.application.get_wallet_response_impl import GetWalletResponseImpl

__all__ = [
    "InitTransactionImpl",
    "GetWalletResponseImpl",
]
