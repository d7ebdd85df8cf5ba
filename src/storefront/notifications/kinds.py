from enum import Enum


class NotificationType(Enum):
    ORDER_CONFIRMATION = "Order_Confirmation"
    ORDER_CANCELLATION = "Order_Cancellation"


class NotificationChannel(Enum):
    EMAIL = "Email"
