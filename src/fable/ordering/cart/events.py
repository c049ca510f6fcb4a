"""Domain events for the ShoppingCart aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from fable.domain import fable


@fable.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product/size was added to the cart, or its quantity increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True)  # amount added, not the new line total
    line_quantity = Integer(required=True)


@fable.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@fable.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)


@fable.event(part_of="ShoppingCart")
class CartCleared:
    """All lines were removed from the cart after a successful checkout."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier()
    cleared_at = DateTime(required=True)
