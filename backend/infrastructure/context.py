"""Dependency container for handlers and scripts.

Bundles what command and query handlers need:
- Document store (shared by every repository, one transaction scope)
- Repositories (menus, subscriptions, carts, deliveries, orders)
- Event bus (domain events)
- Billing policy (delivery fee and tax rate from the environment)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.delivery_repository import IDeliveryRepository
from domain.shared.ports.document_store import IDocumentStore
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository
from domain.shared.ports.order_repository import IOrderRepository
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.services import BillingPolicy
from infrastructure.config import get_billing_policy
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.persistence.factory import get_document_store
from infrastructure.persistence.repositories import (
    CartRepository,
    DeliveryRepository,
    MenuRepository,
    OrderRepository,
    SubscriptionRepository,
)


@dataclass
class AppContext:
    """Dependencies injected into handlers.

    Attributes:
        store: Document store every repository writes through
        menus: Menu repository
        subscriptions: Subscription repository
        carts: Shopping cart repository
        deliveries: Delivery history repository
        orders: Order repository
        event_bus: Event bus for domain events
        billing_policy: Fee and tax applied to subscription billing and orders
    """

    store: IDocumentStore
    menus: IMenuRepository
    subscriptions: ISubscriptionRepository
    carts: ICartRepository
    deliveries: IDeliveryRepository
    orders: IOrderRepository
    event_bus: IEventBus
    billing_policy: BillingPolicy = field(default_factory=BillingPolicy)

    def get(self, key: str) -> Any:
        """Get dependency by name, None if unknown.

        Example:
            >>> context.get("menus")
        """
        return getattr(self, key, None)


def create_context(
    store: Optional[IDocumentStore] = None,
    event_bus: Optional[IEventBus] = None,
    billing_policy: Optional[BillingPolicy] = None,
) -> AppContext:
    """Create the context, filling gaps from the environment.

    Args:
        store: Document store (default: shared store from REPOSITORY_BACKEND)
        event_bus: Event bus (default: a new InMemoryEventBus)
        billing_policy: Billing policy (default: DELIVERY_FEE_PER_DELIVERY
            and SUBSCRIPTION_TAX_RATE)

    Returns:
        AppContext whose repositories all share one store
    """
    store = store or get_document_store()
    return AppContext(
        store=store,
        menus=MenuRepository(store),
        subscriptions=SubscriptionRepository(store),
        carts=CartRepository(store),
        deliveries=DeliveryRepository(store),
        orders=OrderRepository(store),
        event_bus=event_bus or InMemoryEventBus(),
        billing_policy=billing_policy or get_billing_policy(),
    )
