"""Session identity manager — resolves who the current session belongs to.

State machine:
    UNRESOLVED → IDENTIFIED   (persisted identity restored)
    UNRESOLVED → IDENTIFIED   (identity form submitted, valid and verified)
    UNRESOLVED → UNRESOLVED   (identity form invalid, rejected or failed)

Once identified, a session stays identified until it ends. Only one form
submission may be in flight at a time; a concurrent submission is refused
as busy rather than racing the first one.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum

import structlog
from protean.exceptions import InvalidOperationError, ValidationError

from identity.admin.lookup import CredentialLookup, CredentialLookupError
from identity.session.identity import Admin, Buyer, deserialize, role_of, serialize
from identity.session.storage import SESSION_IDENTITY_KEY, SessionStorage

logger = structlog.get_logger(__name__)

AUTHENTICATION_FAILED_MESSAGE = "Invalid username or password"
LOOKUP_FAILED_MESSAGE = "Unable to sign in right now. Please try again."
BUSY_MESSAGE = "A sign-in is already in progress"


class SessionState(Enum):
    UNRESOLVED = "Unresolved"
    IDENTIFIED = "Identified"


class SubmissionStatus(Enum):
    IDENTIFIED = "Identified"
    INVALID = "Invalid"  # Field-level validation failed
    REJECTED = "Rejected"  # Credentials did not match
    FAILED = "Failed"  # Credential store unavailable
    BUSY = "Busy"  # Another submission is in flight


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of one identity form submission."""

    status: SubmissionStatus
    identity: Buyer | Admin | None = None
    field_errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == SubmissionStatus.IDENTIFIED


def _required(values: dict[str, str], messages: dict[str, str]) -> dict[str, list[str]]:
    return {name: [messages[name]] for name, value in values.items() if not value}


class SessionIdentityManager:
    """Owns the identity of one browser session.

    The manager is an explicit handle: each session gets its own instance
    over its own ``SessionStorage``, so independent sessions never share state.
    """

    def __init__(self, storage: SessionStorage, credentials: CredentialLookup, session_id: str | None = None):
        self._storage = storage
        self._credentials = credentials
        self._session_id = session_id
        self._identity: Buyer | Admin | None = None
        self._submission_lock = threading.Lock()

    @property
    def identity(self) -> Buyer | Admin | None:
        return self._identity

    @property
    def state(self) -> SessionState:
        return SessionState.IDENTIFIED if self._identity is not None else SessionState.UNRESOLVED

    @property
    def is_identified(self) -> bool:
        return self._identity is not None

    def restore(self) -> bool:
        """Adopt a previously persisted identity, if a well-formed one exists."""
        if self._identity is not None:
            return True

        restored = deserialize(self._storage.get(SESSION_IDENTITY_KEY))
        if restored is None:
            return False

        self._identity = restored
        logger.info("Session identity restored", session_id=self._session_id, role=role_of(restored).value)
        return True

    def require_identified(self) -> Buyer | Admin:
        if self._identity is None:
            raise InvalidOperationError("Session has not been identified")
        return self._identity

    def require_admin(self) -> Admin:
        actor = self.require_identified()
        match actor:
            case Admin():
                return actor
            case _:
                raise InvalidOperationError("Administrator access required")

    # -------------------------------------------------------------------
    # Identity form
    # -------------------------------------------------------------------
    def submit_buyer(self, name: str | None, address: str | None) -> SubmissionOutcome:
        """Identify the session as a buyer. Name and address are trimmed before validation."""
        if not self._submission_lock.acquire(blocking=False):
            return SubmissionOutcome(status=SubmissionStatus.BUSY, message=BUSY_MESSAGE)
        try:
            if self._identity is not None:
                return SubmissionOutcome(status=SubmissionStatus.IDENTIFIED, identity=self._identity)

            name = (name or "").strip()
            address = (address or "").strip()
            errors = _required(
                {"name": name, "address": address},
                {"name": "Name is required", "address": "Address is required"},
            )
            if errors:
                return SubmissionOutcome(status=SubmissionStatus.INVALID, field_errors=errors)

            try:
                buyer = Buyer(name=name, address=address)
            except ValidationError as exc:
                return SubmissionOutcome(status=SubmissionStatus.INVALID, field_errors=dict(exc.messages))

            self._identify(buyer)
            return SubmissionOutcome(status=SubmissionStatus.IDENTIFIED, identity=buyer)
        finally:
            self._submission_lock.release()

    def submit_admin(self, username: str | None, password: str | None) -> SubmissionOutcome:
        """Verify an administrator sign-in.

        Unlike the buyer form, credentials are passed to the lookup exactly as
        typed: whitespace may be part of a stored username or password, so only
        empty fields are refused here. A whitespace-only username therefore
        reaches the lookup and is rejected there like any other mismatch.
        """
        if not self._submission_lock.acquire(blocking=False):
            return SubmissionOutcome(status=SubmissionStatus.BUSY, message=BUSY_MESSAGE)
        try:
            if self._identity is not None:
                return SubmissionOutcome(status=SubmissionStatus.IDENTIFIED, identity=self._identity)

            errors = _required(
                {"username": username, "password": password},
                {"username": "Username is required", "password": "Password is required"},
            )
            if errors:
                return SubmissionOutcome(status=SubmissionStatus.INVALID, field_errors=errors)

            try:
                credential = self._credentials.find(username, password)
            except CredentialLookupError as exc:
                logger.error("Admin credential lookup failed", session_id=self._session_id, error=str(exc))
                return SubmissionOutcome(status=SubmissionStatus.FAILED, message=LOOKUP_FAILED_MESSAGE)

            if credential is None:
                logger.warning("Admin authentication failed", session_id=self._session_id, username=username)
                return SubmissionOutcome(status=SubmissionStatus.REJECTED, message=AUTHENTICATION_FAILED_MESSAGE)

            admin = Admin(authenticated=True)
            self._identify(admin)
            return SubmissionOutcome(status=SubmissionStatus.IDENTIFIED, identity=admin)
        finally:
            self._submission_lock.release()

    def _identify(self, actor: Buyer | Admin) -> None:
        self._storage.set(SESSION_IDENTITY_KEY, serialize(actor))
        self._identity = actor
        logger.info("Session identified", session_id=self._session_id, role=role_of(actor).value)
