"""Cart ledger — the line items of the current session's cart.

The ledger is immutable. Every operation returns a ledger (possibly the same
one) and never changes the receiver, so any snapshot handed to checkout stays
consistent. Totals are always derived from the line items; nothing is cached.
"""

from protean.exceptions import ValidationError
from protean.fields import Integer, String

from ordering.domain import ordering


@ordering.value_object
class LineItem:
    """A product as it was when added to the cart, plus how many of it."""

    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    category = String(max_length=20)
    unit_price = Integer(required=True, min_value=0)
    image_url = String(max_length=1024)
    quantity = Integer(required=True, min_value=1)

    @classmethod
    def from_product(cls, product, quantity):
        return cls(
            product_id=str(product.id),
            name=product.name,
            category=product.category,
            unit_price=product.price,
            image_url=product.image_url or "",
            quantity=quantity,
        )

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity):
        return LineItem(
            product_id=self.product_id,
            name=self.name,
            category=self.category,
            unit_price=self.unit_price,
            image_url=self.image_url,
            quantity=quantity,
        )


class CartLedger:
    """Ordered line items, one per product, in order of first addition."""

    __slots__ = ("_items",)

    def __init__(self, items=()):
        items = tuple(items)
        product_ids = [str(item.product_id) for item in items]
        if len(set(product_ids)) != len(product_ids):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})
        self._items = items

    @property
    def items(self) -> tuple:
        return self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __eq__(self, other):
        if not isinstance(other, CartLedger):
            return NotImplemented
        return self._items == other._items

    __hash__ = None

    def __repr__(self):
        return f"CartLedger({list(self._items)!r})"

    def find(self, product_id) -> LineItem | None:
        return next((item for item in self._items if str(item.product_id) == str(product_id)), None)

    def is_empty(self) -> bool:
        return not self._items

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------
    def add(self, product, quantity: int) -> "CartLedger":
        """Add ``quantity`` of ``product``, merging into an existing line.

        Callers reject non-positive quantities; the ledger does not clamp,
        and a line that would fall below one unit fails validation.
        """
        product_id = str(product.id)
        if self.find(product_id) is None:
            return CartLedger((*self._items, LineItem.from_product(product, quantity)))

        return CartLedger(
            item.with_quantity(item.quantity + quantity) if str(item.product_id) == product_id else item
            for item in self._items
        )

    def update_quantity(self, product_id, quantity: int) -> "CartLedger":
        """Replace a line's quantity. Quantities below one leave the ledger unchanged."""
        if quantity < 1 or self.find(product_id) is None:
            return self

        return CartLedger(
            item.with_quantity(quantity) if str(item.product_id) == str(product_id) else item for item in self._items
        )

    def remove(self, product_id) -> "CartLedger":
        if self.find(product_id) is None:
            return self
        return CartLedger(item for item in self._items if str(item.product_id) != str(product_id))

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def total(self) -> int:
        return sum(item.unit_price * item.quantity for item in self._items)

    def item_count(self) -> int:
        """Units across all lines, for the cart badge."""
        return sum(item.quantity for item in self._items)

    def size(self) -> int:
        """Distinct line items."""
        return len(self._items)
