"""Commands for order domain."""

from .place_order import PlaceOrderCommand, PlaceOrderCommandHandler
from .update_order import UpdateOrderCommand, UpdateOrderCommandHandler

__all__ = [
    "PlaceOrderCommand",
    "PlaceOrderCommandHandler",
    "UpdateOrderCommand",
    "UpdateOrderCommandHandler",
]
