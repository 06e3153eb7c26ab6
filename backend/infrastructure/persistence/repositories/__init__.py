"""Aggregate repositories backed by the document store."""

from .base import DocumentRepository
from .menu_repository import MenuRepository
from .subscription_repository import SubscriptionRepository
from .cart_repository import CartRepository
from .delivery_repository import DeliveryRepository
from .order_repository import OrderRepository

__all__ = [
    "DocumentRepository",
    "MenuRepository",
    "SubscriptionRepository",
    "CartRepository",
    "DeliveryRepository",
    "OrderRepository",
]
