"""Storefront session — one browser session's identity, catalogue view and cart.

Every buyer-facing action passes through the session identity gate: browsing,
cart changes and checkout need an identified session, and catalogue
maintenance needs an administrator.
"""

import structlog
from protean.exceptions import ValidationError

from catalogue.filtering import CATEGORY_ALL, filter_catalogue
from catalogue.store import CatalogueStore, MutationResult
from identity.admin.lookup import CredentialLookup
from identity.session.manager import SessionIdentityManager
from identity.session.storage import SessionStorage
from ordering.cart.ledger import CartLedger
from ordering.channel import get_channel
from ordering.channel.port import MessagingChannel
from ordering.checkout.composer import checkout

logger = structlog.get_logger(__name__)


class StorefrontSession:
    def __init__(
        self,
        session_id: str,
        storage: SessionStorage,
        catalogue_store: CatalogueStore,
        credentials: CredentialLookup,
        channel: MessagingChannel | None = None,
    ):
        self.session_id = session_id
        self.identity = SessionIdentityManager(storage, credentials, session_id=session_id)
        self._store = catalogue_store
        self._channel = channel
        self.products: list = []
        self.admin_listing: list = []
        self.ledger = CartLedger()

        self.identity.restore()

    @property
    def channel(self) -> MessagingChannel:
        return self._channel if self._channel is not None else get_channel()

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    def refresh_catalogue(self) -> list:
        """Fetch the catalogue again, as every page load does."""
        self.products = self._store.query()
        return self.products

    def browse(self, search_text: str = "", category: str = CATEGORY_ALL) -> list:
        self.identity.require_identified()
        self.refresh_catalogue()
        return filter_catalogue(self.products, search_text, category)

    def _current_product(self, product_id):
        self.refresh_catalogue()
        return next((p for p in self.products if str(p.id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def add_to_cart(self, product_id, quantity: int) -> CartLedger:
        self.identity.require_identified()

        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        product = self._current_product(product_id)
        if product is None:
            raise ValidationError({"product_id": ["Product not found"]})
        if not product.in_stock:
            raise ValidationError({"product_id": ["Product is out of stock"]})

        self.ledger = self.ledger.add(product, quantity)
        return self.ledger

    def update_quantity(self, product_id, quantity: int) -> CartLedger:
        self.identity.require_identified()
        self.ledger = self.ledger.update_quantity(product_id, quantity)
        return self.ledger

    def remove_from_cart(self, product_id) -> CartLedger:
        self.identity.require_identified()
        self.ledger = self.ledger.remove(product_id)
        return self.ledger

    def checkout(self) -> dict | None:
        """Send the current cart to the messaging channel.

        Returns the channel receipt, or None when the cart is empty or the
        session has no buyer. The cart is left as it is either way.
        """
        receipt = checkout(self.ledger, self.identity.identity, self.channel)
        if receipt is not None:
            logger.info("Checkout completed", session_id=self.session_id, status=receipt.get("status"))
        return receipt

    # -------------------------------------------------------------------
    # Catalogue maintenance (administrators only)
    # -------------------------------------------------------------------
    def admin_products(self) -> list:
        self.identity.require_admin()
        self.admin_listing = self._store.list_for_admin()
        return self.admin_listing

    def _after_mutation(self, result: MutationResult, action: str) -> MutationResult:
        if result.success:
            self.admin_listing = self._store.list_for_admin()
            self.refresh_catalogue()
        else:
            logger.warning(
                "Catalogue change failed",
                session_id=self.session_id,
                action=action,
                reason=result.failure_reason,
            )
        return result

    def admin_add_product(self, fields: dict) -> MutationResult:
        self.identity.require_admin()
        return self._after_mutation(self._store.insert(fields), "insert")

    def admin_update_product(self, product_id: str, fields: dict) -> MutationResult:
        self.identity.require_admin()
        return self._after_mutation(self._store.update(product_id, fields), "update")

    def admin_delete_product(self, product_id: str) -> MutationResult:
        self.identity.require_admin()
        return self._after_mutation(self._store.delete(product_id), "delete")
