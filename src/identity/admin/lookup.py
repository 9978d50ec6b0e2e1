"""Administrator credential lookup — port and Protean-backed adapter.

A lookup answers one question: is there a stored record whose username and
password both equal the submitted pair exactly? It returns at most one match
and raises ``CredentialLookupError`` when the store itself cannot be reached.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.domain import Domain
from protean.utils.globals import current_domain

from identity.admin.account import AdminAccount
from identity.domain import identity


class CredentialLookupError(Exception):
    """The credential store failed to answer."""


@dataclass(frozen=True)
class AdminCredential:
    """The matching credential record, without its password."""

    admin_id: str
    username: str


class CredentialLookup(ABC):
    """Abstract administrator credential lookup."""

    @abstractmethod
    def find(self, username: str, password: str) -> AdminCredential | None:
        """Return the record matching both fields exactly, or None."""
        ...


class ProteanCredentialLookup(CredentialLookup):
    """Looks credentials up in the identity domain's AdminAccount repository."""

    def __init__(self, domain: Domain = identity):
        self._domain = domain

    def find(self, username: str, password: str) -> AdminCredential | None:
        try:
            with self._domain.domain_context():
                records = (
                    current_domain.repository_for(AdminAccount)
                    ._dao.query.filter(username=username, password=password)
                    .all()
                    .items
                )
        except Exception as exc:
            raise CredentialLookupError(str(exc)) from exc

        # Case-insensitive backends must not widen the match
        for record in records:
            if record.username == username and record.password == password:
                return AdminCredential(admin_id=str(record.id), username=record.username)
        return None
