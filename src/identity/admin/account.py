"""AdminAccount aggregate — a stored administrator credential record."""

from datetime import datetime

from protean.fields import DateTime, String

from identity.domain import identity


@identity.aggregate
class AdminAccount:
    """An operator allowed to maintain the catalogue.

    The password is stored and compared as given; there is no hashing.
    """

    username: String(required=True, max_length=150, unique=True)
    password: String(required=True, max_length=255)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, username, password):
        return cls(username=username, password=password, created_at=datetime.now())
