from payment_callback.services.cart_client import CartClient
from payment_callback.services.navigator import Navigator
from payment_callback.services.notifier import NotificationCenter, RedisNotificationPublisher
from payment_callback.services.order_client import OrderConfirmationClient
from payment_callback.services.pending_order import PendingOrderStore

__all__ = [
    "CartClient",
    "Navigator",
    "NotificationCenter",
    "OrderConfirmationClient",
    "PendingOrderStore",
    "RedisNotificationPublisher",
]
