"""Admin-driven order status changes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from fable.domain import fable
from fable.ordering.order.order import Order
from fable.utils.logging import get_logger

logger = get_logger(__name__)


@fable.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=30)


@fable.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.transition_to(command.status)
        repo.add(order)
        logger.info("order_status_changed", order_id=str(order.id), previous=previous, new=order.status)
