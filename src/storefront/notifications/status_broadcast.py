"""Pushes OrderStatusChanged to the owner's real-time subscribers."""

import structlog
from protean import handle

from storefront.domain import storefront
from storefront.notifications.realtime.fanout import attached_fanout
from storefront.order.events import OrderStatusChanged
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderStatusBroadcaster:
    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        fanout = attached_fanout()
        if fanout is None:
            logger.debug("No real-time fan-out attached, status event dropped", order_id=str(event.order_id))
            return

        delivered = fanout.publish_status(
            user_id=str(event.user_id),
            order_id=str(event.order_id),
            status=event.status,
        )
        logger.info(
            "Order status pushed",
            order_id=str(event.order_id),
            user_id=str(event.user_id),
            status=event.status,
            delivered=delivered,
        )
