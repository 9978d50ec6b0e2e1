"""Application tests for the catalogue maintenance command handler."""

import pytest
from catalogue.product.management import AddProduct, RemoveProduct, UpdateProduct
from catalogue.product.product import Product
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


def _add_product(**overrides):
    defaults = {
        "name": "Fresh Tilapia Fish",
        "category": "fish",
        "price": 35000,
    }
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestAddProductHandler:
    def test_add_product_minimal(self):
        product_id = _add_product()
        assert product_id is not None

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Fresh Tilapia Fish"
        assert product.category == "fish"
        assert product.price == 35000
        assert product.in_stock is True

    def test_add_product_with_all_fields(self):
        product_id = _add_product(
            name="Chicken Nuggets",
            category="frozen",
            price=42000,
            image_url="https://example.com/nuggets.jpg",
            description="500 g pack",
            in_stock=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.image_url == "https://example.com/nuggets.jpg"
        assert product.description == "500 g pack"
        assert product.in_stock is False

    def test_add_product_with_unknown_category(self):
        with pytest.raises(ValidationError):
            _add_product(category="bakery")

    def test_add_product_with_negative_price(self):
        with pytest.raises(ValidationError):
            _add_product(price=-500)


class TestUpdateProductHandler:
    def test_update_changes_only_supplied_fields(self):
        product_id = _add_product(description="Cleaned")
        current_domain.process(UpdateProduct(product_id=product_id, price=30000), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 30000
        assert product.name == "Fresh Tilapia Fish"
        assert product.description == "Cleaned"

    def test_mark_out_of_stock(self):
        product_id = _add_product()
        current_domain.process(UpdateProduct(product_id=product_id, in_stock=False), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.in_stock is False

    def test_update_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", price=1000), asynchronous=False)


class TestRemoveProductHandler:
    def test_remove_product(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_remove_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveProduct(product_id="missing"), asynchronous=False)
