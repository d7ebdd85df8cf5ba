"""Order cancellation template: sent when the owner cancels an order."""

from storefront.notifications.kinds import NotificationChannel, NotificationType


class OrderCancellationTemplate:
    notification_type = NotificationType.ORDER_CANCELLATION.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        product_name = context.get("product_name", "your product")
        order_id = context.get("order_id", "N/A")
        return {
            "subject": "Order Cancellation",
            "body": (
                f"Your order for {product_name} has been cancelled.\n\n"
                f"Order: #{order_id}\n\n"
                "If you have questions, please contact our support team."
            ),
        }
