"""Catalogue management: admin commands and handler for products."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from fable.catalogue.product import Product
from fable.domain import fable
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    price = Float(required=True)
    category = String(required=True, max_length=50)
    sizes = Text(required=True)  # JSON: list of size labels
    images = Text(required=True)  # JSON: list of image URLs
    description = Text(required=True)
    details = Text()  # JSON: list of bullet points
    fabric_and_care = Text()
    is_trending = Boolean(default=False)
    is_new = Boolean(default=False)


@fable.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    price = Float()
    category = String(max_length=50)
    sizes = Text()
    images = Text()
    description = Text()
    details = Text()
    fabric_and_care = Text()
    is_trending = Boolean()
    is_new = Boolean()


@fable.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _json_list(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


@fable.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            category=command.category,
            sizes=_json_list(command.sizes),
            images=_json_list(command.images),
            description=command.description,
            details=_json_list(command.details),
            fabric_and_care=command.fabric_and_care,
            is_trending=command.is_trending,
            is_new=command.is_new,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update(
            name=command.name,
            price=command.price,
            category=command.category,
            sizes=_json_list(command.sizes),
            images=_json_list(command.images),
            description=command.description,
            details=_json_list(command.details),
            fabric_and_care=command.fabric_and_care,
            is_trending=command.is_trending,
            is_new=command.is_new,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id))
