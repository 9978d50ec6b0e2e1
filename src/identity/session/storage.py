"""Session-scoped storage port.

Holds string values for the lifetime of one browser session. The identity
manager reads a single key once at startup and writes it once on successful
identification.
"""

from abc import ABC, abstractmethod

SESSION_IDENTITY_KEY = "customer_info"


class SessionStorage(ABC):
    """Abstract key/value storage scoped to one session."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...


class InMemorySessionStorage(SessionStorage):
    """Session storage backed by a dict; lives as long as the object does."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
