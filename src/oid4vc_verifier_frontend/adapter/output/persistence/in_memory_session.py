"""In-memory implementation of Session"""

import asyncio
import logging
import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from returns.result import Failure, Result, Success

from oid4vc_verifier_frontend.port.output import (
    Session,
    SessionError,
    SessionKey,
    validate_session_value,
)

log = logging.getLogger(__name__)

DEFAULT_SESSION_TTL_SECONDS = 900.0


@dataclass
class _Entry:
    data: Dict[SessionKey, Any] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    last_used: float = 0.0


class InMemorySessionStore:
    """
    Holds the sessions of all users, keyed by session id.

    Each session id has its own asyncio.Lock, so operations on different
    transactions never wait on or interfere with each other. Concurrent writes
    to the same slot of the same session are last-write-wins.

    A session is dropped as soon as its last slot is deleted, and sessions left
    unused for longer than ttl_seconds are evicted on the next access to the store.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}

    @staticmethod
    def new_session_id() -> str:
        """Generate an unguessable session identifier"""
        return secrets.token_urlsafe(32)

    def session(self, session_id: str) -> "InMemorySession":
        """
        Get the session for an id, creating empty storage on first use.

        Args:
            session_id: Session identifier (e.g. from a cookie)

        Returns:
            InMemorySession bound to that id
        """
        if not session_id or not session_id.strip():
            raise ValueError("session_id cannot be blank")
        self._evict_expired()
        entry = self._entries.get(session_id)
        if entry is None:
            entry = self._entries[session_id] = _Entry()
        entry.last_used = self._clock()
        return InMemorySession(entry.data, entry.lock, store=self, session_id=session_id)

    def lookup(self, session_id: Optional[str]) -> "InMemorySession":
        """
        Get the session for an id without creating storage.

        Unknown or expired ids get a detached, empty session that is never stored.
        """
        self._evict_expired()
        entry = self._entries.get(session_id) if session_id else None
        if entry is None:
            return InMemorySession()
        entry.last_used = self._clock()
        return InMemorySession(entry.data, entry.lock, store=self, session_id=session_id)

    def discard(self, session_id: str) -> None:
        """Drop a session entirely"""
        self._entries.pop(session_id, None)

    def count(self) -> int:
        return len(self._entries)

    def _retain(self, session_id: str, data: Dict[SessionKey, Any], lock: asyncio.Lock) -> None:
        # a written session is stored again if it was released or evicted meanwhile
        entry = self._entries.get(session_id)
        if entry is None:
            entry = self._entries[session_id] = _Entry(data, lock)
        if entry.data is data:
            entry.last_used = self._clock()

    def _release(self, session_id: str, data: Dict[SessionKey, Any]) -> None:
        entry = self._entries.get(session_id)
        if entry is not None and entry.data is data and not data:
            del self._entries[session_id]

    def _evict_expired(self) -> None:
        deadline = self._clock() - self.ttl_seconds
        expired = [session_id for session_id, entry in self._entries.items() if entry.last_used < deadline]
        for session_id in expired:
            del self._entries[session_id]
        if expired:
            log.debug("Evicted %d expired sessions", len(expired))


class InMemorySession(Session):
    """
    In-memory implementation of Session.

    Uses a Python dictionary shared with its InMemorySessionStore.
    Thread-safe for async operations using asyncio.Lock.
    """

    def __init__(
        self,
        data: Optional[Dict[SessionKey, Any]] = None,
        lock: Optional[asyncio.Lock] = None,
        store: Optional[InMemorySessionStore] = None,
        session_id: Optional[str] = None,
    ):
        self._data: Dict[SessionKey, Any] = data if data is not None else {}
        self._lock = lock or asyncio.Lock()
        self._store = store
        self._session_id = session_id

    async def get(self, key: SessionKey) -> Result[Optional[Any], SessionError]:
        try:
            session_key = SessionKey(key)
        except ValueError:
            return Failure(SessionError(f"Unknown session key: {key!r}"))
        async with self._lock:
            return Success(self._data.get(session_key))

    async def get_batch(self, *keys: SessionKey) -> Result[Dict[SessionKey, Any], SessionError]:
        async with self._lock:
            return Success({key: self._data[key] for key in keys if key in self._data})

    async def set(self, key: SessionKey, value: Any) -> Result[None, SessionError]:
        try:
            session_key = validate_session_value(key, value)
        except SessionError as e:
            return Failure(e)
        async with self._lock:
            self._data[session_key] = value
            self._written()
        return Success(None)

    async def set_batch(self, values: Mapping[SessionKey, Any]) -> Result[None, SessionError]:
        """
        Store several values as one write.

        All values are validated before any is stored.
        """
        try:
            validated = {validate_session_value(key, value): value for key, value in values.items()}
        except SessionError as e:
            return Failure(e)
        async with self._lock:
            self._data.update(validated)
            if validated:
                self._written()
        return Success(None)

    async def delete(self, key: SessionKey) -> Result[Optional[Any], SessionError]:
        async with self._lock:
            removed = self._data.pop(key, None)
            self._deleted()
        return Success(removed)

    async def delete_batch(self, *keys: SessionKey) -> Result[Dict[SessionKey, Any], SessionError]:
        async with self._lock:
            removed = {key: self._data.pop(key) for key in keys if key in self._data}
            self._deleted()
        return Success(removed)

    async def keys(self) -> Result[List[SessionKey], SessionError]:
        async with self._lock:
            return Success(list(self._data.keys()))

    def _written(self) -> None:
        if self._store is not None:
            self._store._retain(self._session_id, self._data, self._lock)

    def _deleted(self) -> None:
        if self._store is not None and not self._data:
            self._store._release(self._session_id, self._data)
