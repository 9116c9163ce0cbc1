"""Common test fixtures for domain tests"""

import pytest

from oid4vc_verifier_frontend.domain import (
    JarmEncrypted,
    JarmSigned,
    JarmSignedAndEncrypted,
    Nonce,
    PresentationId,
)


@pytest.fixture
def presentation_id() -> PresentationId:
    """Sample presentation ID"""
    return PresentationId(value="pid-1")


@pytest.fixture
def nonce() -> Nonce:
    """Sample nonce"""
    return Nonce(value="nonce_xyz789")


@pytest.fixture
def private_jwk_dict() -> dict:
    """Sample EC private JWK"""
    return {
        "kty": "EC",
        "crv": "P-256",
        "use": "enc",
        "alg": "ECDH-ES",
        "x": "f83OJ3D2xF1Bg8vub9tLe1gHMzV76e8Tus9uPHvRVEU",
        "y": "x_FEzRu9m36HLN_tue659LNpXW6pCyStikYjKIWI5a0",
        "d": "jpsQnnGQmL-YBIffH1136cspYG6-0iY7X1fCE9-E9LI",
    }


@pytest.fixture
def signed() -> JarmSigned:
    return JarmSigned(algorithm="ES256")


@pytest.fixture
def encrypted() -> JarmEncrypted:
    return JarmEncrypted(algorithm="ECDH-ES+A256KW", enc_method="A256GCM")


@pytest.fixture
def signed_and_encrypted(signed, encrypted) -> JarmSignedAndEncrypted:
    return JarmSignedAndEncrypted(signed=signed, encrypted=encrypted)
