"""Order aggregate: an immutable snapshot of a completed checkout.

Line items copy the product's name, image and price at purchase time, and the
shipping address is copied by value from the customer's address book, so
later catalogue or address edits never change a placed order. After creation
only ``status`` moves, and only along the transitions below:

    PENDING → OUT_FOR_DELIVERY → DELIVERED
    PENDING → CANCELLED
    OUT_FOR_DELIVERY → CANCELLED

DELIVERED and CANCELLED are terminal.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from fable.domain import fable
from fable.ordering.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "Pending"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.CANCELLED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS.get(current, set())


def parse_status(value) -> OrderStatus:
    """Accept either the enum value ("Out for Delivery") or its name ("OUT_FOR_DELIVERY")."""
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value)
    except ValueError:
        pass
    try:
        return OrderStatus[str(value).strip().upper().replace(" ", "_")]
    except KeyError:
        raise ValidationError({"status": [f"Unknown order status '{value}'"]}) from None


@fable.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, frozen at checkout time."""

    name = String(required=True, max_length=100)
    line1 = String(required=True, max_length=255)
    line2 = String(max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=20)


@fable.entity(part_of="Order")
class OrderItem:
    """One purchased line, with product details duplicated from the catalogue."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    image = String(max_length=500)
    size = String(required=True, max_length=20)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    position = Integer(default=0)

    @property
    def line_total(self) -> float:
        return round(self.price * self.quantity, 2)


def compute_total(items_data) -> float:
    return round(sum(item["price"] * item["quantity"] for item in items_data), 2)


@fable.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    shipping_address = ValueObject(ShippingAddress, required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, customer_id, items_data, shipping_address):
        """Create a Pending order from line snapshots.

        Args:
            customer_id: The customer placing the order.
            items_data: List of dicts with product_id, name, image, size,
                        quantity and price (the authoritative unit price).
            shipping_address: Dict with the ShippingAddress fields.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one line item"]})

        now = datetime.now(UTC)
        total_amount = compute_total(items_data)

        order = cls(
            customer_id=customer_id,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
            shipping_address=ShippingAddress(**shipping_address),
            created_at=now,
            updated_at=now,
        )
        for position, item in enumerate(items_data):
            order.add_items(
                OrderItem(
                    product_id=item["product_id"],
                    name=item["name"],
                    image=item.get("image"),
                    size=item["size"],
                    quantity=item["quantity"],
                    price=item["price"],
                    position=position,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps(items_data),
                item_count=sum(item["quantity"] for item in items_data),
                total_amount=total_amount,
                shipping_address=json.dumps(shipping_address),
                placed_at=now,
            )
        )
        return order

    def ordered_items(self):
        return sorted(self.items, key=lambda i: i.position or 0)

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def transition_to(self, new_status):
        target = parse_status(new_status)
        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )
