"""Shopping Cart aggregate: one per customer, created on first add, emptied at checkout.

A cart holds at most one line per (product, size) pair. Adding a pair that is
already present increases its quantity instead of appending a duplicate line.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from fable.domain import fable
from fable.ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated


@fable.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


def _require_positive(quantity):
    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})


@fable.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id, size):
        return next(
            (i for i in self.items if str(i.product_id) == str(product_id) and i.size == size),
            None,
        )

    def ordered_items(self):
        """Lines in the order they were first added."""
        return sorted(self.items, key=lambda i: i.added_at or self.created_at)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product_id, size, quantity=1):
        """Add a product/size line, or increase the quantity of the existing one."""
        _require_positive(quantity)

        now = datetime.now(UTC)
        existing = self.find_item(product_id, size)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product_id, size=size, quantity=quantity, added_at=now))
            line_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                product_id=str(product_id),
                size=size,
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_item_quantity(self, product_id, size, quantity):
        """Overwrite a line's quantity. Quantities below 1 are rejected; use remove_item instead."""
        _require_positive(quantity)

        item = self.find_item(product_id, size)
        if item is None:
            raise ObjectNotFoundError(f"Cart has no line for product `{product_id}` in size `{size}`")

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                size=size,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id, size):
        """Remove a line if present. Returns False when there was nothing to remove."""
        item = self.find_item(product_id, size)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id), size=size))
        return True

    def clear(self, order_id=None):
        """Empty the cart after checkout. The cart itself is kept for reuse."""
        for item in list(self.items):
            self.remove_items(item)

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                order_id=str(order_id) if order_id else None,
                cleared_at=now,
            )
        )
