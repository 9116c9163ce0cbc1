"""Ephemeral ECDH key material

A fresh key pair is minted for every transaction. The private half is kept in
the user's session and used once to decrypt the wallet's JARM response; only
the public half ever leaves the verifier.

The two halves are separate types. The public key can only be obtained from a
private key through derive_public(), which drops the private exponent.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict

PRIVATE_EXPONENT = "d"


def _parse_jwk(value: str) -> Dict[str, Any]:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("JWK cannot be blank")
    try:
        jwk = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"JWK is not valid JSON: {e}") from e
    if not isinstance(jwk, dict):
        raise ValueError("JWK must be a JSON object")
    if not isinstance(jwk.get("kty"), str) or not jwk["kty"]:
        raise ValueError("JWK must contain 'kty' field")
    return jwk


@dataclass(frozen=True)
class EphemeralECDHPublicJwk:
    """Public half of the ephemeral key, sent to the backend as JSON"""

    value: str

    def __post_init__(self) -> None:
        jwk = _parse_jwk(self.value)
        if PRIVATE_EXPONENT in jwk:
            raise ValueError("Public JWK must not contain private key material")

    def as_dict(self) -> Dict[str, Any]:
        return json.loads(self.value)

    def to_json(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"EphemeralECDHPublicJwk({self.value})"


@dataclass(frozen=True)
class EphemeralECDHPrivateJwk:
    """Private half of the ephemeral key, stored in the session only"""

    value: str

    def __post_init__(self) -> None:
        jwk = _parse_jwk(self.value)
        if PRIVATE_EXPONENT not in jwk:
            raise ValueError("Private JWK must contain the private exponent 'd'")

    @classmethod
    def from_dict(cls, jwk: Dict[str, Any]) -> "EphemeralECDHPrivateJwk":
        return cls(value=json.dumps(jwk, separators=(",", ":"), sort_keys=True))

    @classmethod
    def from_json(cls, value: str) -> "EphemeralECDHPrivateJwk":
        return cls(value=value)

    def as_dict(self) -> Dict[str, Any]:
        return json.loads(self.value)

    def to_json(self) -> str:
        return self.value

    def derive_public(self) -> EphemeralECDHPublicJwk:
        """Public key with the private exponent removed"""
        jwk = self.as_dict()
        del jwk[PRIVATE_EXPONENT]
        return EphemeralECDHPublicJwk(value=json.dumps(jwk, separators=(",", ":"), sort_keys=True))

    def __repr__(self) -> str:
        # keep the exponent out of logs and tracebacks
        jwk = self.as_dict()
        return f"EphemeralECDHPrivateJwk(kty={jwk.get('kty')!r}, crv={jwk.get('crv')!r})"
