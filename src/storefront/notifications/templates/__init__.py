"""Template registry: maps NotificationType to template classes."""

from storefront.notifications.kinds import NotificationType
from storefront.notifications.templates.order_cancellation import OrderCancellationTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationType.ORDER_CANCELLATION.value: OrderCancellationTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
