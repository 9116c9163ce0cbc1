"""Tests for the joserfc JOSE adapters"""

import json

import pytest
from joserfc import jwt
from joserfc.jwe import encrypt_compact
from joserfc.jwk import ECKey
from returns.result import Failure, Success

from oid4vc_verifier_frontend.adapter.output.jose import JoserfcEphemeralKeyGenerator, JoserfcJarmVerifier
from oid4vc_verifier_frontend.domain import (
    EphemeralECDHPrivateJwk,
    JarmEncrypted,
    JarmSigned,
    JarmSignedAndEncrypted,
)

ENCRYPTED = JarmEncrypted(algorithm="ECDH-ES+A256KW", enc_method="A256GCM")
SIGNED = JarmSigned(algorithm="ES256")
CLAIMS = {"vp_token": "o2d2ZXJzaW9u", "state": "abc"}


async def generate_key() -> EphemeralECDHPrivateJwk:
    return (await JoserfcEphemeralKeyGenerator().generate()).unwrap()


def encrypt_to(private_jwk: EphemeralECDHPrivateJwk, plaintext: bytes, option: JarmEncrypted = ENCRYPTED) -> str:
    """Encrypt as the wallet would, using only the public half"""
    public_key = ECKey.import_key(private_jwk.derive_public().as_dict())
    return encrypt_compact(
        {"alg": option.algorithm, "enc": option.enc_method},
        plaintext,
        public_key,
        algorithms=[option.algorithm, option.enc_method],
    )


class TestJoserfcEphemeralKeyGenerator:
    """Tests for JoserfcEphemeralKeyGenerator"""

    @pytest.mark.asyncio
    async def test_generates_p256_encryption_key(self):
        result = await JoserfcEphemeralKeyGenerator().generate()

        assert isinstance(result, Success)
        jwk = result.unwrap().as_dict()
        assert jwk["kty"] == "EC"
        assert jwk["crv"] == "P-256"
        assert jwk["use"] == "enc"
        assert "alg" not in jwk
        assert "d" in jwk

    @pytest.mark.asyncio
    async def test_pins_algorithm(self):
        result = await JoserfcEphemeralKeyGenerator(algorithm="ECDH-ES+A256KW").generate()
        assert result.unwrap().as_dict()["alg"] == "ECDH-ES+A256KW"

    @pytest.mark.asyncio
    async def test_keys_are_fresh(self):
        first, second = await generate_key(), await generate_key()
        assert first.as_dict()["d"] != second.as_dict()["d"]


class TestJoserfcJarmVerifier:
    """Tests for JoserfcJarmVerifier"""

    @pytest.mark.asyncio
    async def test_decrypts_encrypted_response(self):
        private_jwk = await generate_key()
        response = encrypt_to(private_jwk, json.dumps(CLAIMS).encode("utf-8"))

        result = await JoserfcJarmVerifier().verify(ENCRYPTED, private_jwk, response)

        assert isinstance(result, Success)
        assert result.unwrap().vp_token == "o2d2ZXJzaW9u"
        assert result.unwrap().state == "abc"

    @pytest.mark.asyncio
    async def test_wrong_key_fails(self):
        """A response encrypted to another transaction's key is rejected"""
        response = encrypt_to(await generate_key(), json.dumps(CLAIMS).encode("utf-8"))

        result = await JoserfcJarmVerifier().verify(ENCRYPTED, await generate_key(), response)

        assert isinstance(result, Failure)
        assert "decrypt" in str(result.failure())

    @pytest.mark.asyncio
    async def test_garbage_fails(self):
        result = await JoserfcJarmVerifier().verify(ENCRYPTED, await generate_key(), "not-a-jwe")
        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_non_json_plaintext_fails(self):
        private_jwk = await generate_key()
        response = encrypt_to(private_jwk, b"plain text")

        result = await JoserfcJarmVerifier().verify(ENCRYPTED, private_jwk, response)

        assert isinstance(result, Failure)
        assert "not valid JSON" in str(result.failure())

    @pytest.mark.asyncio
    async def test_verifies_signed_response_with_wallet_key(self):
        wallet_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        response = jwt.encode({"alg": "ES256", "kid": wallet_key.kid}, CLAIMS, wallet_key)
        verifier = JoserfcJarmVerifier(wallet_verification_jwks=[wallet_key.as_dict(private=False)])

        result = await verifier.verify(SIGNED, await generate_key(), response)

        assert result.unwrap().vp_token == "o2d2ZXJzaW9u"

    @pytest.mark.asyncio
    async def test_rejects_signature_from_unknown_key(self):
        wallet_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        other_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        response = jwt.encode({"alg": "ES256", "kid": other_key.kid}, CLAIMS, other_key)
        verifier = JoserfcJarmVerifier(wallet_verification_jwks=[wallet_key.as_dict(private=False)])

        result = await verifier.verify(SIGNED, await generate_key(), response)

        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_signed_without_wallet_keys_is_rejected(self):
        """Without wallet keys a signature cannot be checked, so nothing is accepted"""
        attacker_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        forged = jwt.encode({"alg": "ES256", "kid": attacker_key.kid}, {"vp_token": "forged"}, attacker_key)

        result = await JoserfcJarmVerifier().verify(SIGNED, await generate_key(), forged)

        assert isinstance(result, Failure)
        assert "No wallet verification keys" in str(result.failure())

    @pytest.mark.asyncio
    async def test_signed_and_encrypted_without_wallet_keys_is_rejected(self):
        attacker_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        private_jwk = await generate_key()
        forged = jwt.encode({"alg": "ES256", "kid": attacker_key.kid}, {"vp_token": "forged"}, attacker_key)
        response = encrypt_to(private_jwk, forged.encode("utf-8"))

        result = await JoserfcJarmVerifier().verify(
            JarmSignedAndEncrypted(signed=SIGNED, encrypted=ENCRYPTED), private_jwk, response
        )

        assert isinstance(result, Failure)

    @pytest.mark.asyncio
    async def test_signed_and_encrypted(self):
        """The nested JWS is recovered from the JWE and verified"""
        wallet_key = ECKey.generate_key("P-256", private=True, auto_kid=True)
        private_jwk = await generate_key()
        signed = jwt.encode({"alg": "ES256", "kid": wallet_key.kid}, CLAIMS, wallet_key)
        response = encrypt_to(private_jwk, signed.encode("utf-8"))
        verifier = JoserfcJarmVerifier(wallet_verification_jwks=[wallet_key.as_dict(private=False)])

        result = await verifier.verify(JarmSignedAndEncrypted(signed=SIGNED, encrypted=ENCRYPTED), private_jwk, response)

        assert result.unwrap().vp_token == "o2d2ZXJzaW9u"
