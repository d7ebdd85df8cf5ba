"""Order confirmation template: sent when an order is placed."""

from storefront.notifications.kinds import NotificationChannel, NotificationType


class OrderConfirmationTemplate:
    notification_type = NotificationType.ORDER_CONFIRMATION.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def render(context: dict) -> dict:
        product_name = context.get("product_name", "your product")
        order_id = context.get("order_id", "N/A")
        quantity = context.get("quantity", 1)
        return {
            "subject": "Order Confirmation",
            "body": (
                f"Your order for {product_name} has been placed.\n\n"
                f"Order: #{order_id}\n"
                f"Quantity: {quantity}\n"
                f"Shipping to: {context.get('address', 'N/A')}\n\n"
                "We'll let you know as soon as it ships."
            ),
        }
