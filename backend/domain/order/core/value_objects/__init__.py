"""Value objects for order domain."""

from .enums import OrderStatus, PaymentStatus

__all__ = ["OrderStatus", "PaymentStatus"]
