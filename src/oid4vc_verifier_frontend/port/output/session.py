"""Session port - Interface for per-transaction state storage"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Final, List, Mapping, Optional

from returns.result import Result

from oid4vc_verifier_frontend.domain import Nonce, PresentationId


class SessionKey(str, Enum):
    """Named slots of the transaction session"""

    PRESENTATION_ID: Final[str] = "presentationId"
    NONCE: Final[str] = "nonce"
    EPHEMERAL_ECDH_PRIVATE_JWK: Final[str] = "ephemeralECDHPrivateJwk"


SESSION_SCHEMA_VERSION: Final[int] = 1

# Value type stored under each slot. The private key is kept as its JSON serialization.
SESSION_SCHEMA: Final[Dict[SessionKey, type]] = {
    SessionKey.PRESENTATION_ID: PresentationId,
    SessionKey.NONCE: Nonce,
    SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK: str,
}

TRANSACTION_KEYS: Final[tuple[SessionKey, ...]] = (
    SessionKey.PRESENTATION_ID,
    SessionKey.NONCE,
    SessionKey.EPHEMERAL_ECDH_PRIVATE_JWK,
)


class SessionError(Exception):
    """Error raised by session storage"""

    def __init__(self, message: str, key: Optional[SessionKey] = None):
        self.key = key
        super().__init__(message)


def validate_session_value(key: Any, value: Any) -> SessionKey:
    """
    Check a key/value pair against the session schema.

    Returns:
        The key as a SessionKey

    Raises:
        SessionError: If the key is unknown or the value has the wrong type
    """
    try:
        session_key = SessionKey(key)
    except ValueError:
        raise SessionError(f"Unknown session key: {key!r}")
    expected = SESSION_SCHEMA[session_key]
    if not isinstance(value, expected):
        raise SessionError(
            f"Invalid value for session key '{session_key.value}': "
            f"expected {expected.__name__}, got {type(value).__name__}",
            key=session_key,
        )
    return session_key


class Session(ABC):
    """
    Storage for the state of one user's transaction.

    Only the slots declared by SessionKey can be stored, with values of the
    type given in SESSION_SCHEMA. Implementations can use memory, signed
    cookies, Redis, etc. Absent keys read as None.
    """

    @abstractmethod
    async def get(self, key: SessionKey) -> Result[Optional[Any], SessionError]:
        """
        Retrieve the value stored under key.

        Returns:
            Success(value or None) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def get_batch(self, *keys: SessionKey) -> Result[Dict[SessionKey, Any], SessionError]:
        """
        Retrieve several values at once.

        Returns:
            Success(mapping containing only the keys that are present) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def set(self, key: SessionKey, value: Any) -> Result[None, SessionError]:
        """
        Store a value.

        Returns:
            Success(None) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def set_batch(self, values: Mapping[SessionKey, Any]) -> Result[None, SessionError]:
        """
        Store several values as one write. Either all values are stored or none.

        Returns:
            Success(None) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def delete(self, key: SessionKey) -> Result[Optional[Any], SessionError]:
        """
        Remove a value.

        Returns:
            Success(removed value or None) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def delete_batch(self, *keys: SessionKey) -> Result[Dict[SessionKey, Any], SessionError]:
        """
        Remove several values.

        Returns:
            Success(mapping of removed keys to their previous values) or Failure(SessionError)
        """
        pass

    @abstractmethod
    async def keys(self) -> Result[List[SessionKey], SessionError]:
        pass
