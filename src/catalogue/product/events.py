"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue by an administrator."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Integer(required=True)
    in_stock: Boolean(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """One or more product fields were changed by an administrator."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Integer(required=True)
    in_stock: Boolean(required=True)
