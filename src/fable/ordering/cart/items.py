"""Cart item management: commands, handler, and the per-customer cart lookup."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from fable.catalogue.product import Product
from fable.domain import fable
from fable.ordering.cart.cart import ShoppingCart
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_customer(self, customer_id):
        """Return the customer's cart, or None if they have never added anything."""
        carts = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return carts[0] if carts else None


@fable.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(min_value=1, default=1)


@fable.command(part_of="ShoppingCart")
class SetCartQuantity:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)


@fable.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)


@fable.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.offers_size(command.size):
            raise ValidationError({"size": ["Selected size is not available for this product"]})

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            cart = ShoppingCart.create(customer_id=command.customer_id)
            logger.debug("cart_created", customer_id=str(command.customer_id), cart_id=str(cart.id))

        cart.add_item(
            product_id=command.product_id,
            size=command.size,
            quantity=command.quantity or 1,
        )
        repo.add(cart)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            raise ObjectNotFoundError(f"Cart has no line for product `{command.product_id}` in size `{command.size}`")

        cart.set_item_quantity(
            product_id=command.product_id,
            size=command.size,
            quantity=command.quantity,
        )
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            return

        if cart.remove_item(product_id=command.product_id, size=command.size):
            repo.add(cart)
