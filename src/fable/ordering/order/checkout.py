"""Checkout: turn the customer's cart into a Pending order.

1. Load the cart (EmptyCart when missing or without lines)
2. Resolve the shipping address among the customer's own addresses
3. Snapshot each line's current product name, image and price
4. Total the snapshot on the server
5. Persist the order
6. Empty the cart

Steps 5 and 6 happen inside this handler's unit of work, so the order and the
emptied cart are committed together. Two concurrent checkouts of the same cart
race on the cart's version; the loser's commit is rejected and its order is
never written. A resubmission after success finds an empty cart.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from fable.catalogue.product import Product
from fable.domain import fable
from fable.identity.customer import Customer
from fable.ordering.cart.cart import ShoppingCart
from fable.ordering.order.order import Order
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    address_id = Identifier(required=True)


def _snapshot_lines(cart):
    product_repo = current_domain.repository_for(Product)
    lines = []
    for item in cart.ordered_items():
        try:
            product = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            raise ValidationError(
                {"items": [f"Product {item.product_id} is no longer available; remove it from your cart"]}
            ) from None

        lines.append(
            {
                "product_id": str(product.id),
                "name": product.name,
                "image": product.primary_image,
                "size": item.size,
                "quantity": item.quantity,
                "price": product.price,
            }
        )
    return lines


@fable.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.for_customer(command.customer_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        customer = current_domain.repository_for(Customer).get(command.customer_id)
        address = customer.find_address(command.address_id)
        if address is None:
            raise ValidationError({"address_id": ["Invalid shipping address selected"]})

        order = Order.place(
            customer_id=command.customer_id,
            items_data=_snapshot_lines(cart),
            shipping_address=address.snapshot(),
        )
        cart.clear(order_id=order.id)

        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_amount=order.total_amount,
            line_count=len(order.items),
        )
        return str(order.id)
