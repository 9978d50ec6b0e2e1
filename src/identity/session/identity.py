"""Session identity variants — who is using the storefront.

An identity is exactly one of two value objects: a ``Buyer`` carrying
delivery details, or an ``Admin`` that has passed credential verification.
There is no "authenticated buyer" and no unauthenticated admin. Consumers
match on the concrete type.
"""

import json
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, String, Text

from identity.domain import identity


class IdentityRole(Enum):
    BUYER = "buyer"
    ADMIN = "admin"


@identity.value_object
class Buyer:
    """An anonymous shopper, known only by the name and address they typed."""

    name: String(required=True, max_length=255)
    address: Text(required=True)

    @invariant.post
    def name_and_address_must_not_be_blank(self):
        errors = {}
        if not (self.name or "").strip():
            errors["name"] = ["Name is required"]
        if not (self.address or "").strip():
            errors["address"] = ["Address is required"]
        if errors:
            raise ValidationError(errors)


@identity.value_object
class Admin:
    """An operator whose credentials matched a stored record."""

    authenticated: Boolean(default=True)

    @invariant.post
    def admin_must_be_authenticated(self):
        if self.authenticated is not True:
            raise ValidationError({"authenticated": ["An admin identity must be authenticated"]})


def role_of(actor: Buyer | Admin) -> IdentityRole:
    match actor:
        case Buyer():
            return IdentityRole.BUYER
        case Admin():
            return IdentityRole.ADMIN
        case _:
            raise TypeError(f"Not a session identity: {actor!r}")


def to_payload(actor: Buyer | Admin) -> dict:
    """Tagged, JSON-ready representation of an identity."""
    match actor:
        case Buyer():
            return {"role": IdentityRole.BUYER.value, "name": actor.name, "address": actor.address}
        case Admin():
            return {"role": IdentityRole.ADMIN.value, "authenticated": True}
        case _:
            raise TypeError(f"Not a session identity: {actor!r}")


def serialize(actor: Buyer | Admin) -> str:
    return json.dumps(to_payload(actor))


def deserialize(raw: str | None) -> Buyer | Admin | None:
    """Rebuild an identity from its persisted form.

    Anything missing, unparseable or failing validation yields ``None``.
    A payload without a role is read as a buyer.
    """
    if not raw:
        return None

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return None

    if not isinstance(payload, dict):
        return None

    try:
        match payload.get("role", IdentityRole.BUYER.value):
            case IdentityRole.BUYER.value:
                return Buyer(name=payload.get("name"), address=payload.get("address"))
            case IdentityRole.ADMIN.value:
                if payload.get("authenticated") is not True:
                    return None
                return Admin(authenticated=True)
            case _:
                return None
    except ValidationError:
        return None
