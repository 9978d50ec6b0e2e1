"""Fake catalogue store — holds products in memory for tests and demos."""

from datetime import datetime
from types import SimpleNamespace
from uuid import uuid4

from catalogue.store import CatalogueStore, MutationResult, sort_for_admin, sort_for_storefront


class FakeCatalogueStore(CatalogueStore):
    """Catalogue store that keeps products in a dict and can be told to fail.

    Products may be any objects exposing the Product attributes; inserts
    build plain records rather than aggregates.
    """

    def __init__(self, products=None):
        self.products: dict[str, object] = {str(p.id): p for p in (products or [])}
        self.should_succeed = True
        self.failure_reason = "Catalogue store unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Catalogue store unavailable"):
        """Configure the fake store behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def query(self) -> list:
        if not self.should_succeed:
            return []
        return sort_for_storefront(self.products.values())

    def list_for_admin(self) -> list:
        if not self.should_succeed:
            return []
        return sort_for_admin(self.products.values())

    def insert(self, fields: dict) -> MutationResult:
        if not self.should_succeed:
            return MutationResult(success=False, failure_reason=self.failure_reason)

        record = SimpleNamespace(
            id=uuid4().hex,
            name=fields["name"],
            category=fields["category"],
            price=fields["price"],
            image_url=fields.get("image_url") or "",
            description=fields.get("description") or "",
            in_stock=fields.get("in_stock", True),
            created_at=datetime.now(),
        )
        self.products[record.id] = record
        return MutationResult(success=True, product=record)

    def update(self, product_id: str, fields: dict) -> MutationResult:
        if not self.should_succeed:
            return MutationResult(success=False, failure_reason=self.failure_reason)
        if product_id not in self.products:
            return MutationResult(success=False, failure_reason="Product not found")

        product = self.products[product_id]
        for field, value in fields.items():
            if value is not None:
                setattr(product, field, value)
        return MutationResult(success=True, product=product)

    def delete(self, product_id: str) -> MutationResult:
        if not self.should_succeed:
            return MutationResult(success=False, failure_reason=self.failure_reason)
        if self.products.pop(product_id, None) is None:
            return MutationResult(success=False, failure_reason="Product not found")
        return MutationResult(success=True)

    def reset(self):
        """Clear products and restore success (useful between tests)."""
        self.products.clear()
        self.should_succeed = True
        self.failure_reason = "Catalogue store unavailable"
