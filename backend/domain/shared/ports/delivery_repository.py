"""Subscription delivery repository port (interface)."""

from typing import List, Optional, Protocol

from domain.shared.ports.document_store import ITransaction
from domain.subscription.core.entities.delivery import SubscriptionDelivery


class IDeliveryRepository(Protocol):
    """Interface for the delivery history of subscriptions."""

    async def save(self, delivery: SubscriptionDelivery, tx: Optional[ITransaction] = None) -> None:
        """Create or replace a delivery record."""
        ...

    async def list_by_subscription(self, subscription_id: str) -> List[SubscriptionDelivery]:
        """Return the deliveries of a subscription, newest first."""
        ...
