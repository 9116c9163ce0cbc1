"""JARM option - how the wallet protects its authorization response

JARM (JWT Secured Authorization Response Mode) wraps the wallet's authorization
response in a signed JWT, an encrypted JWT, or a signed-then-encrypted JWT.

JarmOption is a closed set of three immutable variants:
- JarmSigned: signature only (JWS)
- JarmEncrypted: encryption only (JWE)
- JarmSignedAndEncrypted: signed JWS nested inside a JWE

Accessors are module-level functions that dispatch on the variant and end in
assert_never, so adding a variant without handling it is a type error.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Union, assert_never


@dataclass(frozen=True)
class JarmSigned:
    """
    Response is a signed JWT.

    Attributes:
        algorithm: JWS algorithm (ES256, RS256, ...)
    """

    algorithm: str

    def __post_init__(self) -> None:
        if not self.algorithm or not self.algorithm.strip():
            raise ValueError("JWS algorithm cannot be blank")


@dataclass(frozen=True)
class JarmEncrypted:
    """
    Response is an encrypted JWT.

    Attributes:
        algorithm: JWE key management algorithm (ECDH-ES, ECDH-ES+A256KW, ...)
        enc_method: JWE content encryption method (A256GCM, ...)
    """

    algorithm: str
    enc_method: str

    def __post_init__(self) -> None:
        if not self.algorithm or not self.algorithm.strip():
            raise ValueError("JWE algorithm cannot be blank")
        if not self.enc_method or not self.enc_method.strip():
            raise ValueError("JWE encryption method cannot be blank")


@dataclass(frozen=True)
class JarmSignedAndEncrypted:
    """
    Response is a signed JWT nested inside an encrypted JWT.

    Attributes:
        signed: Signing part
        encrypted: Encryption part
    """

    signed: JarmSigned
    encrypted: JarmEncrypted


JarmOption = Union[JarmSigned, JarmEncrypted, JarmSignedAndEncrypted]


def jws_alg(option: JarmOption) -> Optional[str]:
    """JWS algorithm, defined for signed variants only"""
    if isinstance(option, JarmSigned):
        return option.algorithm
    elif isinstance(option, JarmEncrypted):
        return None
    elif isinstance(option, JarmSignedAndEncrypted):
        return jws_alg(option.signed)
    else:
        assert_never(option)


def jwe_alg(option: JarmOption) -> Optional[str]:
    """JWE key management algorithm, defined for encrypted variants only"""
    if isinstance(option, JarmSigned):
        return None
    elif isinstance(option, JarmEncrypted):
        return option.algorithm
    elif isinstance(option, JarmSignedAndEncrypted):
        return jwe_alg(option.encrypted)
    else:
        assert_never(option)


def jwe_enc(option: JarmOption) -> Optional[str]:
    """JWE content encryption method, defined for encrypted variants only"""
    if isinstance(option, JarmSigned):
        return None
    elif isinstance(option, JarmEncrypted):
        return option.enc_method
    elif isinstance(option, JarmSignedAndEncrypted):
        return jwe_enc(option.encrypted)
    else:
        assert_never(option)


def is_signed(option: JarmOption) -> bool:
    return jws_alg(option) is not None


def is_encrypted(option: JarmOption) -> bool:
    return jwe_alg(option) is not None


def parse_jarm_option(
    signed_response_alg: Optional[str],
    encrypted_response_alg: Optional[str],
    encrypted_response_enc: Optional[str],
) -> Optional[JarmOption]:
    """
    Build a JarmOption from client metadata values.

    Args:
        signed_response_alg: authorization_signed_response_alg
        encrypted_response_alg: authorization_encrypted_response_alg
        encrypted_response_enc: authorization_encrypted_response_enc

    Returns:
        The matching JarmOption, or None when no protection is configured

    Raises:
        ValueError: If only one of the encryption parameters is given
    """
    signed = JarmSigned(algorithm=signed_response_alg) if signed_response_alg else None

    encrypted: Optional[JarmEncrypted] = None
    if encrypted_response_alg and encrypted_response_enc:
        encrypted = JarmEncrypted(algorithm=encrypted_response_alg, enc_method=encrypted_response_enc)
    elif encrypted_response_alg or encrypted_response_enc:
        raise ValueError(
            "authorization_encrypted_response_alg and authorization_encrypted_response_enc "
            "must be provided together"
        )

    if signed and encrypted:
        return JarmSignedAndEncrypted(signed=signed, encrypted=encrypted)
    if signed:
        return signed
    return encrypted


def describe_jarm_option(option: JarmOption) -> Dict[str, Optional[str]]:
    """Summarize a JarmOption for logs and diagnostics"""
    return {
        "type": type(option).__name__,
        "jws_alg": jws_alg(option),
        "jwe_alg": jwe_alg(option),
        "jwe_enc": jwe_enc(option),
    }
