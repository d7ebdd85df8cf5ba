"""Order status updates: command and handler.

Cancellation is not a valid target here; it goes through CancelOrder.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.status)
        repo.add(order)
        return order.status
