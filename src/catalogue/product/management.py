"""Catalogue maintenance — administrator commands and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=20)
    price: Integer(required=True, min_value=0)
    image_url: String(max_length=1024)
    description: Text()
    in_stock: Boolean(default=True)


@catalogue.command(part_of="Product")
class UpdateProduct:
    """Partial update: only the supplied fields change."""

    product_id: Identifier(required=True)
    name: String(max_length=255)
    category: String(max_length=20)
    price: Integer(min_value=0)
    image_url: String(max_length=1024)
    description: Text()
    in_stock: Boolean()


@catalogue.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            category=command.category,
            price=command.price,
            image_url=command.image_url,
            description=command.description,
            in_stock=command.in_stock if command.in_stock is not None else True,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            category=command.category,
            price=command.price,
            image_url=command.image_url,
            description=command.description,
            in_stock=command.in_stock,
        )
        repo.add(product)
        logger.info("Product updated", product_id=str(command.product_id))

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product removed", product_id=str(command.product_id))
