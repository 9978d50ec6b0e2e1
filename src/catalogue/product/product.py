"""Product aggregate root — a single item offered by the grocery store."""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String, Text

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded, ProductUpdated

# Fields an administrator may change after creation
EDITABLE_FIELDS = ("name", "category", "price", "image_url", "description", "in_stock")


class ProductCategory(Enum):
    """The fixed set of shelves a product can sit on."""

    VEGETABLES = "vegetables"
    FISH = "fish"
    FROZEN = "frozen"
    SPICES = "spices"


@catalogue.aggregate
class Product:
    """A purchasable product with a whole-rupiah unit price.

    Products are created, edited and deleted only through administrator
    action; the storefront reads them.
    """

    name: String(required=True, max_length=255)
    category: String(required=True, choices=ProductCategory)
    price: Integer(required=True, min_value=0)
    image_url: String(max_length=1024, default="")
    description: Text(default="")
    in_stock: Boolean(default=True)
    created_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, category, price, image_url="", description="", in_stock=True):
        product = cls(
            name=name,
            category=category,
            price=price,
            image_url=image_url or "",
            description=description or "",
            in_stock=in_stock,
            created_at=datetime.now(),
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                in_stock=product.in_stock,
                created_at=product.created_at,
            )
        )
        return product

    def update(self, **changes):
        """Apply a partial update. Fields passed as ``None`` are left untouched."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        applied = {field: value for field, value in changes.items() if value is not None}
        if not applied:
            return

        for field, value in applied.items():
            setattr(self, field, value)

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                category=self.category,
                price=self.price,
                in_stock=self.in_stock,
            )
        )
