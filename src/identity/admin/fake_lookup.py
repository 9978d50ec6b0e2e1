"""Fake credential lookup — in-memory records for testing."""

from uuid import uuid4

from identity.admin.lookup import AdminCredential, CredentialLookup, CredentialLookupError


class FakeCredentialLookup(CredentialLookup):
    """Credential lookup over an in-memory list that can simulate outages."""

    def __init__(self, records: list[dict] | None = None):
        self.records: list[dict] = []
        for record in records or []:
            self.add(record["username"], record["password"])
        self.calls: list[tuple[str, str]] = []
        self.should_succeed = True
        self.failure_reason = "Credential store unavailable"

    def add(self, username: str, password: str) -> None:
        self.records.append({"admin_id": f"admin-{uuid4().hex[:12]}", "username": username, "password": password})

    def configure(self, should_succeed: bool = True, failure_reason: str = "Credential store unavailable"):
        """Configure the fake lookup behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def find(self, username: str, password: str) -> AdminCredential | None:
        self.calls.append((username, password))
        if not self.should_succeed:
            raise CredentialLookupError(self.failure_reason)

        for record in self.records:
            if record["username"] == username and record["password"] == password:
                return AdminCredential(admin_id=record["admin_id"], username=record["username"])
        return None

    def reset(self):
        """Clear records and calls (useful between tests)."""
        self.records.clear()
        self.calls.clear()
        self.should_succeed = True
        self.failure_reason = "Credential store unavailable"
