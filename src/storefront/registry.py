"""Session registry — maps session cookies to storefront sessions.

Each session id owns one session-scoped storage. Building a session over an
existing storage restores whatever identity was persisted in it; ending a
session discards both. The server never learns when a browser closes, so a
session idle for longer than ``idle_timeout`` seconds is ended on the next
``open``, and the least recently used session is ended once ``max_sessions``
are held.
"""

import os
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from uuid import uuid4

import structlog

from catalogue.store import CatalogueStore, ProteanCatalogueStore
from identity.admin.lookup import CredentialLookup, ProteanCredentialLookup
from identity.session.storage import InMemorySessionStorage
from ordering.channel.port import MessagingChannel
from storefront.session import StorefrontSession

logger = structlog.get_logger(__name__)

DEFAULT_IDLE_TIMEOUT = int(os.environ.get("STOREFRONT_SESSION_TTL", 60 * 60))
DEFAULT_MAX_SESSIONS = int(os.environ.get("STOREFRONT_MAX_SESSIONS", 10_000))


class SessionRegistry:
    def __init__(
        self,
        catalogue_store: CatalogueStore | None = None,
        credentials: CredentialLookup | None = None,
        channel: MessagingChannel | None = None,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.catalogue_store = catalogue_store or ProteanCatalogueStore()
        self.credentials = credentials or ProteanCredentialLookup()
        self.channel = channel
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self._clock = clock
        self._storages: dict[str, InMemorySessionStorage] = {}
        self._sessions: dict[str, StorefrontSession] = {}
        # Session ids, least recently used first
        self._last_seen: OrderedDict[str, float] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._last_seen)

    def open(self, session_id: str | None = None) -> StorefrontSession:
        """Return the live session for ``session_id``, starting one if needed."""
        with self._lock:
            now = self._clock()
            self._expire_idle(now)

            if session_id and session_id in self._sessions:
                self._touch(session_id, now)
                return self._sessions[session_id]

            session_id = session_id if session_id in self._storages else uuid4().hex
            if session_id not in self._last_seen:
                self._make_room()

            storage = self._storages.setdefault(session_id, InMemorySessionStorage())
            session = StorefrontSession(
                session_id,
                storage,
                self.catalogue_store,
                self.credentials,
                channel=self.channel,
            )
            self._sessions[session_id] = session
            self._touch(session_id, now)
            return session

    def reload(self, session_id: str) -> StorefrontSession:
        """Rebuild a session from its storage, as a page reload does."""
        with self._lock:
            self._sessions.pop(session_id, None)
        return self.open(session_id)

    def end(self, session_id: str) -> None:
        with self._lock:
            self._discard(session_id)

    def _touch(self, session_id: str, now: float) -> None:
        self._last_seen[session_id] = now
        self._last_seen.move_to_end(session_id)

    def _discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)
        self._storages.pop(session_id, None)
        self._last_seen.pop(session_id, None)

    def _expire_idle(self, now: float) -> None:
        while self._last_seen:
            session_id, seen = next(iter(self._last_seen.items()))
            if now - seen < self.idle_timeout:
                break
            self._discard(session_id)
            logger.debug("Idle session expired", session_id=session_id)

    def _make_room(self) -> None:
        while len(self._last_seen) >= self.max_sessions:
            session_id = next(iter(self._last_seen))
            self._discard(session_id)
            logger.info("Session evicted", session_id=session_id, max_sessions=self.max_sessions)


_current_registry: SessionRegistry | None = None


def get_registry() -> SessionRegistry:
    """Return the process-wide session registry."""
    global _current_registry
    if _current_registry is None:
        _current_registry = SessionRegistry()
    return _current_registry


def set_registry(registry: SessionRegistry) -> None:
    """Override the session registry (useful for tests)."""
    global _current_registry
    _current_registry = registry


def reset_registry() -> None:
    global _current_registry
    _current_registry = None
