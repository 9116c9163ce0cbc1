"""
Basic usage example for the OID4VC verifier frontend

This script demonstrates:
1. Creating a frontend configuration and the default adapters
2. Initializing a transaction against a (simulated) verifier backend
3. The wallet answering with an encrypted JARM response
4. Retrieving and verifying the wallet response
"""

import asyncio
import json

import httpx
from joserfc.jwe import encrypt_compact
from joserfc.jwk import ECKey
from returns.result import Failure

from oid4vc_verifier_frontend.adapter import (
    HttpxClient,
    InMemorySessionStore,
    JoserfcEphemeralKeyGenerator,
    JoserfcJarmVerifier,
    StubMdocVerifier,
    default_generate_nonce,
    default_generate_wallet_redirect_uri,
    default_generate_wallet_response_redirect_uri_template,
    default_is_mobile,
    mdl_presentation_definition,
)
from oid4vc_verifier_frontend.application import GetWalletResponseImpl, InitTransactionImpl
from oid4vc_verifier_frontend.config import create_test_config
from oid4vc_verifier_frontend.domain import ResponseCode
from oid4vc_verifier_frontend.port.input import GetWalletResponseRequest, InitTransactionRequest

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
)


class SimulatedBackend:
    """Verifier backend plus wallet, answering over httpx.MockTransport"""

    def __init__(self):
        self.public_jwk = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            body = json.loads(request.content)
            self.public_jwk = json.loads(body["ephemeral_ecdh_public_jwk"])
            return httpx.Response(
                200,
                json={
                    "presentation_id": "pid-1",
                    "client_id": "verifier-backend.example",
                    "request_uri": "https://verifier-backend.example/wallet/request.jwt/abc",
                },
            )

        # The wallet encrypted its authorization response to the ephemeral public key
        claims = {"vp_token": "o2d2ZXJzaW9uYzEuMGlkb2N1bWVudHOA", "state": "abc"}
        jwe = encrypt_compact(
            {"alg": "ECDH-ES+A256KW", "enc": "A256GCM"},
            json.dumps(claims).encode("utf-8"),
            ECKey.import_key(self.public_jwk),
            algorithms=["ECDH-ES+A256KW", "A256GCM"],
        )
        return httpx.Response(200, json={"state": "abc", "response": jwe})


async def main():
    """Run the example"""

    print("=" * 60)
    print("OID4VC Verifier Frontend - Basic Usage Example")
    print("=" * 60)

    # 1. Setup
    print("\n1. Setting up frontend...")

    config = create_test_config()
    http_client = HttpxClient(transport=httpx.MockTransport(SimulatedBackend()))

    init_transaction = InitTransactionImpl(
        config=config,
        http_client=http_client,
        ephemeral_key_generator=JoserfcEphemeralKeyGenerator(),
        generate_nonce=default_generate_nonce,
        generate_presentation_definition=mdl_presentation_definition,
        generate_wallet_response_redirect_uri_template=default_generate_wallet_response_redirect_uri_template,
        generate_wallet_redirect_uri=default_generate_wallet_redirect_uri,
        is_mobile=default_is_mobile,
    )
    get_wallet_response = GetWalletResponseImpl(
        config=config,
        http_client=http_client,
        jarm_verifier=JoserfcJarmVerifier(),
        mdoc_verifier=StubMdocVerifier(),
    )

    store = InMemorySessionStore()
    session = store.session(store.new_session_id())

    print("✓ Frontend configured")

    # 2. Initialize transaction
    print("\n2. Initializing transaction...")

    init_result = await init_transaction.execute(
        InitTransactionRequest(headers={"User-Agent": IPHONE_UA}, session=session)
    )
    if isinstance(init_result, Failure):
        print(f"✗ Failed to initialize transaction: {init_result.failure()}")
        return

    init_response = init_result.unwrap()
    print("✓ Transaction initialized")
    print(f"  - Mobile: {init_response.is_mobile}")
    print(f"  - Wallet redirect URI: {init_response.wallet_redirect_uri}")

    # 3. Retrieve wallet response
    print("\n3. Retrieving wallet response...")

    result = await get_wallet_response.execute(
        GetWalletResponseRequest(session=session, response_code=ResponseCode(value="rc-1"))
    )
    if isinstance(result, Failure):
        print(f"✗ Failed to retrieve response: {result.failure()}")
        return

    verification = result.unwrap()
    print("✓ Wallet response retrieved")
    print(f"  - Valid: {verification.valid}")
    print(f"  - VP token: {verification.vp_token}")

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)
    print("\nStubMdocVerifier reports every credential as not verified.")
    print("Plug in a real ISO 18013-5 verifier to verify mDL presentations.")


if __name__ == "__main__":
    asyncio.run(main())
