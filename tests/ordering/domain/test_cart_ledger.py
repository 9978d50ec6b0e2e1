"""Tests for the cart ledger."""

from types import SimpleNamespace

import pytest
from ordering.cart.ledger import CartLedger, LineItem
from protean.exceptions import ValidationError

SPINACH = SimpleNamespace(id="p1", name="Fresh Spinach", category="vegetables", price=5000, image_url="spinach.jpg")
CHILI = SimpleNamespace(id="p2", name="Red Chili", category="vegetables", price=3000, image_url="")
TILAPIA = SimpleNamespace(id="p3", name="Fresh Tilapia Fish", category="fish", price=35000, image_url=None)


class TestLineItem:
    def test_snapshot_of_product(self):
        item = LineItem.from_product(SPINACH, 2)
        assert item.product_id == "p1"
        assert item.name == "Fresh Spinach"
        assert item.unit_price == 5000
        assert item.image_url == "spinach.jpg"
        assert item.quantity == 2
        assert item.subtotal == 10000

    def test_quantity_below_one_cannot_exist(self):
        with pytest.raises(ValidationError):
            LineItem.from_product(SPINACH, 0)

    def test_missing_image_becomes_empty(self):
        assert LineItem.from_product(TILAPIA, 1).image_url == ""


class TestAdd:
    def test_add_to_empty_ledger(self):
        ledger = CartLedger().add(SPINACH, 1)
        assert ledger.size() == 1
        assert ledger.find("p1").quantity == 1

    def test_same_product_merges_into_one_line(self):
        ledger = CartLedger().add(SPINACH, 1).add(SPINACH, 2)
        assert ledger.size() == 1
        assert ledger.find("p1").quantity == 3

    def test_new_products_append_in_order(self):
        ledger = CartLedger().add(SPINACH, 1).add(CHILI, 1).add(TILAPIA, 1)
        assert [item.product_id for item in ledger] == ["p1", "p2", "p3"]

    def test_merge_keeps_position(self):
        ledger = CartLedger().add(SPINACH, 1).add(CHILI, 1).add(SPINACH, 1)
        assert [item.product_id for item in ledger] == ["p1", "p2"]

    def test_line_keeps_price_from_first_addition(self):
        ledger = CartLedger().add(SPINACH, 1)
        repriced = SimpleNamespace(**{**vars(SPINACH), "price": 9000})
        ledger = ledger.add(repriced, 1)
        assert ledger.find("p1").unit_price == 5000

    def test_add_zero_is_rejected(self):
        with pytest.raises(ValidationError):
            CartLedger().add(SPINACH, 0)


class TestUpdateQuantity:
    def test_replaces_quantity(self):
        ledger = CartLedger().add(SPINACH, 1).update_quantity("p1", 5)
        assert ledger.find("p1").quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_below_one_is_ignored(self, quantity):
        ledger = CartLedger().add(SPINACH, 2)
        assert ledger.update_quantity("p1", quantity) is ledger
        assert ledger.find("p1").quantity == 2

    def test_unknown_product_is_ignored(self):
        ledger = CartLedger().add(SPINACH, 2)
        assert ledger.update_quantity("missing", 4) is ledger


class TestRemove:
    def test_remove_line(self):
        ledger = CartLedger().add(SPINACH, 1).add(CHILI, 1).remove("p1")
        assert [item.product_id for item in ledger] == ["p2"]

    def test_remove_unknown_product_is_a_no_op(self):
        ledger = CartLedger().add(SPINACH, 1)
        assert ledger.remove("missing") is ledger

    def test_remove_last_line_empties_ledger(self):
        ledger = CartLedger().add(SPINACH, 1).remove("p1")
        assert ledger.is_empty()
        assert ledger.total() == 0


class TestDerivedValues:
    def test_totals(self):
        ledger = CartLedger().add(SPINACH, 2).add(CHILI, 1)
        assert ledger.total() == 13000
        assert ledger.item_count() == 3
        assert ledger.size() == 2

    def test_empty_ledger(self):
        ledger = CartLedger()
        assert ledger.is_empty()
        assert ledger.total() == 0
        assert ledger.item_count() == 0
        assert ledger.size() == 0


class TestImmutability:
    def test_operations_leave_the_receiver_unchanged(self):
        original = CartLedger().add(SPINACH, 1)
        original.add(SPINACH, 4)
        original.add(CHILI, 1)
        original.update_quantity("p1", 9)
        original.remove("p1")

        assert original.size() == 1
        assert original.find("p1").quantity == 1

    def test_equal_contents_compare_equal(self):
        assert CartLedger().add(SPINACH, 1) == CartLedger().add(SPINACH, 1)

    def test_duplicate_products_cannot_be_constructed(self):
        item = LineItem.from_product(SPINACH, 1)
        with pytest.raises(ValidationError):
            CartLedger([item, item])
