"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from fable.domain import fable


@fable.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of line snapshots
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    shipping_address = Text(required=True)  # JSON: address snapshot
    placed_at = DateTime(required=True)


@fable.event(part_of="Order")
class OrderStatusChanged:
    """An operator moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=30)
    new_status = String(required=True, max_length=30)
    changed_at = DateTime(required=True)
