"""Order cancellation: command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)  # The user asking for the cancellation


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(requested_by=command.user_id)
        repo.add(order)
        return order.status
