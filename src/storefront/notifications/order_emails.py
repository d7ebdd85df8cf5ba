"""Order emails: confirmation on placement, notice on cancellation.

The confirmation names the product as it was when the order was placed (the
snapshot carried by OrderPlaced). The cancellation notice looks the product
up again and uses its current name.

Email is fire-and-forget: a failed send is logged and never fails the order
operation that triggered it.
"""

import structlog
from protean import handle

from storefront.catalogue.lookup import find_product
from storefront.domain import storefront
from storefront.notifications.channel import get_email_channel
from storefront.notifications.channel.email_port import SENT
from storefront.notifications.kinds import NotificationType
from storefront.notifications.templates import get_template
from storefront.order.events import OrderCancelled, OrderPlaced
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


def send_order_email(to: str | None, notification_type: str, context: dict) -> bool:
    """Render and send one email. Returns True when the adapter reports it as sent."""
    if not to:
        logger.info(
            "No contact email on order, skipping notification",
            notification_type=notification_type,
            order_id=context.get("order_id"),
        )
        return False

    content = get_template(notification_type).render(context)

    try:
        result = get_email_channel().send(to=to, subject=content["subject"], body=content["body"])
    except Exception as e:
        logger.error(
            "Email dispatch raised",
            notification_type=notification_type,
            order_id=context.get("order_id"),
            error=str(e),
        )
        return False

    if result.get("status") != SENT:
        logger.warning(
            "Email dispatch failed",
            notification_type=notification_type,
            order_id=context.get("order_id"),
            error=result.get("error", "Unknown dispatch error"),
        )
        return False

    logger.info(
        "Email sent",
        notification_type=notification_type,
        order_id=context.get("order_id"),
        message_id=result.get("message_id"),
    )
    return True


@storefront.event_handler(part_of=Order)
class OrderEmailHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        send_order_email(
            to=event.contact_email,
            notification_type=NotificationType.ORDER_CONFIRMATION.value,
            context={
                "order_id": str(event.order_id),
                "product_name": event.product_name,
                "quantity": event.quantity,
                "address": event.address,
            },
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        product = find_product(event.product_id)
        if not product.exists:
            logger.warning(
                "Product of cancelled order no longer exists",
                order_id=str(event.order_id),
                product_id=str(event.product_id),
            )

        send_order_email(
            to=event.contact_email,
            notification_type=NotificationType.ORDER_CANCELLATION.value,
            context={
                "order_id": str(event.order_id),
                "product_name": product.display_name or f"product {event.product_id}",
            },
        )
