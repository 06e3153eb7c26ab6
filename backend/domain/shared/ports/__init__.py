"""Domain ports (interfaces for infrastructure adapters)."""

from domain.shared.ports.document_store import Document, IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.delivery_repository import IDeliveryRepository
from domain.shared.ports.order_repository import IOrderRepository

__all__ = [
    "Document",
    "IDocumentStore",
    "ITransaction",
    "IEventBus",
    "IMenuRepository",
    "ISubscriptionRepository",
    "ICartRepository",
    "IDeliveryRepository",
    "IOrderRepository",
]
