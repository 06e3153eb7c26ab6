"""Order enumerations."""

from enum import Enum


class OrderStatus(str, Enum):
    """Fulfilment status, in the order a restaurant moves through it.

    - PENDING: placed, not yet seen by the restaurant
    - CONFIRMED: accepted by the restaurant
    - PREPARING: in the kitchen
    - READY: waiting for the rider
    - OUT_FOR_DELIVERY: on its way
    - DELIVERED: terminal
    - CANCELLED: terminal
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"
