"""JOSE adapters using joserfc"""

import json
import logging
from typing import Any, Dict, Optional, Sequence

from joserfc import jwt
from joserfc.jwe import decrypt_compact
from joserfc.jwk import ECKey, KeySet
from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.domain import (
    AuthorizationResponse,
    EphemeralECDHPrivateJwk,
    JarmEncrypted,
    JarmOption,
    JarmSigned,
    JarmSignedAndEncrypted,
)
from oid4vc_verifier_frontend.port.output import (
    EphemeralKeyGenerator,
    JarmVerificationError,
    JarmVerifier,
    KeyGenerationError,
)

log = logging.getLogger(__name__)

EPHEMERAL_KEY_CURVE = "P-256"


class JoserfcEphemeralKeyGenerator(EphemeralKeyGenerator):
    """
    Generates ephemeral ECDH keys with joserfc.

    Keys are P-256, marked for encryption use. When an algorithm is given it is
    pinned in the JWK so the wallet uses the same key management algorithm the
    response will be decrypted with.
    """

    def __init__(self, curve: str = EPHEMERAL_KEY_CURVE, algorithm: Optional[str] = None):
        self.curve = curve
        self.algorithm = algorithm

    async def generate(self) -> Result[EphemeralECDHPrivateJwk, KeyGenerationError]:
        try:
            key = ECKey.generate_key(self.curve, private=True)
            jwk = key.as_dict(private=True)
            jwk["use"] = "enc"
            if self.algorithm:
                jwk["alg"] = self.algorithm
            return Success(EphemeralECDHPrivateJwk.from_dict(jwk))
        except Exception as e:
            return Failure(KeyGenerationError(f"Failed to generate ephemeral key: {e}"))


class JoserfcJarmVerifier(JarmVerifier):
    """
    Recovers authorization responses from JARM payloads with joserfc.

    - Encrypted: the JWE is decrypted with the ephemeral private key and its
      plaintext read as JSON claims
    - Signed: the JWS is verified against the configured wallet keys. Without
      wallet keys signed responses are rejected
    - Signed and encrypted: the JWE is decrypted and the nested JWS handled as Signed
    """

    def __init__(self, wallet_verification_jwks: Optional[Sequence[Dict[str, Any]]] = None):
        self.wallet_keys: Optional[KeySet] = None
        if wallet_verification_jwks:
            self.wallet_keys = KeySet.import_key_set({"keys": list(wallet_verification_jwks)})

    async def verify(
        self,
        jarm_option: JarmOption,
        private_jwk: EphemeralECDHPrivateJwk,
        response: str,
    ) -> Result[AuthorizationResponse, JarmVerificationError]:
        try:
            claims = self._claims(jarm_option, private_jwk, response)
        except JarmVerificationError as e:
            return Failure(e)
        except Exception as e:
            return Failure(JarmVerificationError(f"Failed to process JARM response: {e}"))

        try:
            return Success(AuthorizationResponse.from_claims(claims))
        except ValueError as e:
            return Failure(JarmVerificationError(f"JARM claims are not an authorization response: {e}"))

    def _claims(self, jarm_option: JarmOption, private_jwk: EphemeralECDHPrivateJwk, response: str) -> Dict[str, Any]:
        if isinstance(jarm_option, JarmSigned):
            return self._verify_signed(response, jarm_option.algorithm)
        if isinstance(jarm_option, JarmEncrypted):
            plaintext = self._decrypt(response, private_jwk, jarm_option)
            return _json_object(plaintext)
        if isinstance(jarm_option, JarmSignedAndEncrypted):
            plaintext = self._decrypt(response, private_jwk, jarm_option.encrypted)
            return self._verify_signed(plaintext.decode("utf-8"), jarm_option.signed.algorithm)
        raise JarmVerificationError(f"Unsupported JARM option: {jarm_option!r}")

    def _decrypt(self, response: str, private_jwk: EphemeralECDHPrivateJwk, option: JarmEncrypted) -> bytes:
        key = ECKey.import_key(private_jwk.as_dict())
        try:
            decrypted = decrypt_compact(response, key, algorithms=[option.algorithm, option.enc_method])
        except Exception as e:
            raise JarmVerificationError(f"Failed to decrypt JARM response: {e}") from e
        return decrypted.plaintext

    def _verify_signed(self, response: str, algorithm: str) -> Dict[str, Any]:
        if self.wallet_keys is None:
            raise JarmVerificationError("No wallet verification keys configured for signed JARM response")

        try:
            token = jwt.decode(response, self.wallet_keys, algorithms=[algorithm])
        except Exception as e:
            raise JarmVerificationError(f"Failed to verify JARM signature: {e}") from e
        return dict(token.claims)


def _json_object(payload: bytes) -> Dict[str, Any]:
    try:
        claims = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise JarmVerificationError(f"JARM payload is not valid JSON: {e}") from e
    if not isinstance(claims, dict):
        raise JarmVerificationError("JARM payload must be a JSON object")
    return claims
