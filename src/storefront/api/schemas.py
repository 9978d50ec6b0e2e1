"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the domain value objects
and Protean commands.
"""

from pydantic import BaseModel, Field

from shared.money import format_price


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class BuyerIdentityRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Ana", "address": "Jl. Mawar 1"}]}}

    name: str = ""
    address: str = ""


class AdminSignInRequest(BaseModel):
    username: str = ""
    password: str = ""


class SessionResponse(BaseModel):
    state: str
    identity: dict | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class ProductResponse(BaseModel):
    id: str
    name: str
    category: str
    price: int
    price_display: str
    image_url: str = ""
    description: str = ""
    in_stock: bool = True

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            category=product.category,
            price=product.price,
            price_display=format_price(product.price),
            image_url=product.image_url or "",
            description=product.description or "",
            in_stock=bool(product.in_stock),
        )


class CatalogueResponse(BaseModel):
    products: list[ProductResponse]
    count: int


class CategoryResponse(BaseModel):
    key: str
    label: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "3f2c9a", "quantity": 2}]}}

    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    image_url: str = ""
    unit_price: int
    unit_price_display: str
    quantity: int
    subtotal: int
    subtotal_display: str


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    item_count: int
    line_count: int
    total: int
    total_display: str

    @classmethod
    def from_ledger(cls, ledger) -> "CartResponse":
        return cls(
            items=[
                CartLineResponse(
                    product_id=str(item.product_id),
                    name=item.name,
                    image_url=item.image_url or "",
                    unit_price=item.unit_price,
                    unit_price_display=format_price(item.unit_price),
                    quantity=item.quantity,
                    subtotal=item.subtotal,
                    subtotal_display=format_price(item.subtotal),
                )
                for item in ledger
            ],
            item_count=ledger.item_count(),
            line_count=ledger.size(),
            total=ledger.total(),
            total_display=format_price(ledger.total()),
        )


class CheckoutResponse(BaseModel):
    message_id: str | None = None
    status: str
    url: str | None = None


# ---------------------------------------------------------------------------
# Catalogue maintenance
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Fresh Tilapia Fish",
                    "category": "fish",
                    "price": 35000,
                    "image_url": "https://example.com/tilapia.jpg",
                    "description": "Cleaned tilapia, about 500 g each.",
                    "in_stock": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    category: str
    price: int = Field(..., ge=0)
    image_url: str = ""
    description: str = ""
    in_stock: bool = True


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    category: str | None = None
    price: int | None = Field(None, ge=0)
    image_url: str | None = None
    description: str | None = None
    in_stock: bool | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
