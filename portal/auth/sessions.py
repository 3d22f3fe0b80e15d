"""Server-side session records.

The browser only ever holds a signed token naming a session id; the session
payload (the resolved principal and, for guests, their dashboard selections)
lives here, outside the relational catalog store.
"""

import copy
import logging
import secrets
import time
from collections.abc import Callable
from threading import Lock

from portal.core import config
from portal.errors import SessionError

logger = logging.getLogger(__name__)


class SessionStore:
    """Storage backend for session payloads."""

    def create(self, data: dict) -> str:
        raise NotImplementedError

    def load(self, session_id: str) -> dict | None:
        raise NotImplementedError

    def update(self, session_id: str, mutate: Callable[[dict], None]) -> dict | None:
        """Apply ``mutate`` to the stored payload atomically; None if the session is gone."""
        raise NotImplementedError

    def destroy(self, session_id: str) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    """Process-local store with sliding expiry."""

    def __init__(self, ttl_seconds: int | None = None, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds or config.SESSION_EXPIRES_MINUTES * 60
        self._clock = clock
        self._records: dict[str, tuple[float, dict]] = {}
        self._lock = Lock()

    def create(self, data: dict) -> str:
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._purge_expired()
            self._records[session_id] = (self._expiry(), copy.deepcopy(data))
        return session_id

    def load(self, session_id: str) -> dict | None:
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None
            expires_at, data = record
            if expires_at <= self._clock():
                del self._records[session_id]
                return None
            return copy.deepcopy(data)

    def update(self, session_id: str, mutate: Callable[[dict], None]) -> dict | None:
        with self._lock:
            record = self._records.get(session_id)
            if record is None:
                return None
            expires_at, data = record
            if expires_at <= self._clock():
                del self._records[session_id]
                return None
            updated = copy.deepcopy(data)
            mutate(updated)
            self._records[session_id] = (self._expiry(), updated)
            return copy.deepcopy(updated)

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._records.pop(session_id, None)

    def _expiry(self) -> float:
        return self._clock() + self.ttl_seconds

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [session_id for session_id, (expires_at, _) in self._records.items() if expires_at <= now]
        for session_id in expired:
            del self._records[session_id]


class SessionState:
    """Session payload bound to one request."""

    def __init__(self, store: SessionStore, session_id: str | None = None, data: dict | None = None):
        self.store = store
        self.session_id = session_id
        self.data = data if data is not None else {}

    @classmethod
    def load(cls, store: SessionStore, session_id: str | None) -> 'SessionState':
        if not session_id:
            return cls(store)
        data = store.load(session_id)
        if data is None:
            return cls(store)
        return cls(store, session_id, data)

    def regenerate(self, data: dict) -> None:
        """Replace this session with a fresh id holding only ``data``."""
        old_session_id = self.session_id
        self.session_id = None
        self.data = {}
        try:
            if old_session_id:
                self.store.destroy(old_session_id)
            new_session_id = self.store.create(data)
        except Exception as exc:
            logger.warning('Session regeneration failed: %s', exc)
            raise SessionError() from exc

        self.session_id = new_session_id
        self.data = copy.deepcopy(data)

    def update(self, mutate: Callable[[dict], None]) -> bool:
        """Apply ``mutate`` to the stored payload and refresh ``data`` from the result.

        Returns False when the session ended (logout, expiry) while this request
        was running; the stored record is never recreated.
        """
        if self.session_id is None:
            return False
        try:
            data = self.store.update(self.session_id, mutate)
        except Exception as exc:
            logger.warning('Session update failed: %s', exc)
            raise SessionError() from exc

        if data is None:
            logger.info('Session ended before its update was applied.')
            self.session_id = None
            self.data = {}
            return False

        self.data = data
        return True

    def destroy(self) -> None:
        if self.session_id is not None:
            try:
                self.store.destroy(self.session_id)
            except Exception:
                logger.exception('Session destroy failed for a logged out session.')
        self.session_id = None
        self.data = {}


session_store: SessionStore = MemorySessionStore()
