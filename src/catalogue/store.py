"""Catalogue store port and its Protean-backed adapter.

The storefront reads the whole catalogue through ``query()`` and filters it
client-side. Administrators mutate it through ``insert``/``update``/``delete``.
Failures never propagate: a failed read degrades to an empty listing and a
failed write is reported through ``MutationResult`` and logged.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import structlog
from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.management import AddProduct, RemoveProduct, UpdateProduct
from catalogue.product.product import EDITABLE_FIELDS, Product

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of an administrator write against the catalogue."""

    success: bool
    product: Product | None = None
    failure_reason: str | None = None


class CatalogueStore(ABC):
    """Abstract catalogue store interface."""

    @abstractmethod
    def query(self) -> list[Product]:
        """All products, sorted by category then name."""
        ...

    @abstractmethod
    def list_for_admin(self) -> list[Product]:
        """All products, newest first."""
        ...

    @abstractmethod
    def insert(self, fields: dict) -> MutationResult:
        """Create a product from everything but its id and timestamp."""
        ...

    @abstractmethod
    def update(self, product_id: str, fields: dict) -> MutationResult:
        """Apply a partial update to an existing product."""
        ...

    @abstractmethod
    def delete(self, product_id: str) -> MutationResult:
        """Delete a product."""
        ...


def sort_for_storefront(products) -> list:
    return sorted(products, key=lambda p: (p.category, p.name))


def sort_for_admin(products) -> list:
    return sorted(products, key=lambda p: p.created_at, reverse=True)


def _describe(exc: ValidationError) -> str:
    messages = getattr(exc, "messages", None) or {}
    if not messages:
        return str(exc)
    return "; ".join(f"{field}: {', '.join(errors)}" for field, errors in messages.items())


class ProteanCatalogueStore(CatalogueStore):
    """Catalogue store backed by the catalogue domain's Product repository.

    Every call runs inside its own catalogue domain context, so callers in
    other bounded contexts need not push one.
    """

    def __init__(self, domain: Domain = catalogue):
        self._domain = domain

    def _all_products(self) -> list[Product]:
        return current_domain.repository_for(Product)._dao.query.all().items

    def query(self) -> list[Product]:
        try:
            with self._domain.domain_context():
                return sort_for_storefront(self._all_products())
        except Exception as exc:
            logger.error("Error fetching products", error=str(exc))
            return []

    def list_for_admin(self) -> list[Product]:
        try:
            with self._domain.domain_context():
                return sort_for_admin(self._all_products())
        except Exception as exc:
            logger.error("Error fetching products for admin", error=str(exc))
            return []

    def insert(self, fields: dict) -> MutationResult:
        try:
            with self._domain.domain_context():
                product_id = current_domain.process(
                    AddProduct(**{k: v for k, v in fields.items() if k in EDITABLE_FIELDS}),
                    asynchronous=False,
                )
                product = current_domain.repository_for(Product).get(product_id)
        except ValidationError as exc:
            logger.error("Error saving product", error=_describe(exc))
            return MutationResult(success=False, failure_reason=_describe(exc))
        except Exception as exc:
            logger.error("Error saving product", error=str(exc))
            return MutationResult(success=False, failure_reason="Failed to save product")

        return MutationResult(success=True, product=product)

    def update(self, product_id: str, fields: dict) -> MutationResult:
        changes = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        try:
            with self._domain.domain_context():
                current_domain.process(UpdateProduct(product_id=product_id, **changes), asynchronous=False)
                product = current_domain.repository_for(Product).get(product_id)
        except ObjectNotFoundError:
            logger.error("Error updating product", product_id=product_id, error="not found")
            return MutationResult(success=False, failure_reason="Product not found")
        except ValidationError as exc:
            logger.error("Error updating product", product_id=product_id, error=_describe(exc))
            return MutationResult(success=False, failure_reason=_describe(exc))
        except Exception as exc:
            logger.error("Error updating product", product_id=product_id, error=str(exc))
            return MutationResult(success=False, failure_reason="Failed to save product")

        return MutationResult(success=True, product=product)

    def delete(self, product_id: str) -> MutationResult:
        try:
            with self._domain.domain_context():
                current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        except ObjectNotFoundError:
            logger.error("Error deleting product", product_id=product_id, error="not found")
            return MutationResult(success=False, failure_reason="Product not found")
        except Exception as exc:
            logger.error("Error deleting product", product_id=product_id, error=str(exc))
            return MutationResult(success=False, failure_reason="Failed to delete product")

        return MutationResult(success=True)
