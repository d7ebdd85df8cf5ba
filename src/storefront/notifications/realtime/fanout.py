"""Order status fan-out over the channel registry.

Clients subscribe by naming an order and their user id, but they are joined
to a per-user group. A subscriber therefore receives status events for every
order belonging to that user, not only the order it named.

The fan-out is built once at application start, attached here for the
domain's event handler, and detached and closed at shutdown. Protean
instantiates event handlers itself, so the handler reads the attached
instance through ``attached_fanout()`` instead of receiving it. The
application lifespan in ``app.py`` is the only writer; tests attach their own
fan-out through a fixture.
"""

import structlog

from storefront.notifications.realtime.registry import ChannelRegistry
from storefront.notifications.realtime.subscriber_port import SubscriberPort

logger = structlog.get_logger(__name__)

ORDER_STATUS_EVENT = "orderStatusUpdated"


class StatusFanout:
    def __init__(self, registry: ChannelRegistry):
        self.registry = registry

    def subscribe(self, order_id: str, user_id: str, subscriber: SubscriberPort) -> None:
        self.registry.join_group(str(user_id), subscriber)
        logger.info("Client subscribed to order updates", order_id=str(order_id), user_id=str(user_id))

    def unsubscribe(self, subscriber: SubscriberPort) -> None:
        self.registry.leave_all(subscriber)

    def publish_status(self, user_id: str, order_id: str, status: str) -> int:
        return self.registry.emit(
            str(user_id),
            ORDER_STATUS_EVENT,
            {"orderId": str(order_id), "status": status},
        )

    def close(self) -> None:
        self.registry.close()


_attached: StatusFanout | None = None


def attach_fanout(fanout: StatusFanout) -> None:
    """Make ``fanout`` the one the status handler publishes to. Called from the app lifespan."""
    global _attached
    _attached = fanout


def detach_fanout() -> StatusFanout | None:
    """Detach and return the current fan-out, if any."""
    global _attached
    fanout, _attached = _attached, None
    return fanout


def attached_fanout() -> StatusFanout | None:
    return _attached
