"""Domain events for order domain."""

from .order_placed import OrderPlaced
from .order_status_changed import OrderStatusChanged

__all__ = ["OrderPlaced", "OrderStatusChanged"]
