"""Subscription repository port (interface)."""

from typing import List, Optional, Protocol

from domain.shared.ports.document_store import ITransaction
from domain.subscription.core.entities.subscription import Subscription


class ISubscriptionRepository(Protocol):
    """
    Interface for subscription persistence operations.

    The subscription, schedule included, is one document: rebuilding the
    schedule and billing and writing them back is a single conditional write.
    """

    async def get_by_id(
        self,
        subscription_id: str,
        tx: Optional[ITransaction] = None,
    ) -> Optional[Subscription]:
        """Return the subscription or None if it does not exist."""
        ...

    async def save(self, subscription: Subscription, tx: Optional[ITransaction] = None) -> None:
        """Create or replace the subscription document."""
        ...

    async def list_by_customer(self, customer_id: str) -> List[Subscription]:
        """Return all subscriptions of a customer."""
        ...

    async def list_by_restaurant(self, restaurant_id: str) -> List[Subscription]:
        """Return all subscriptions to a restaurant."""
        ...

    async def delete(self, subscription_id: str, tx: Optional[ITransaction] = None) -> None:
        """Remove the subscription document."""
        ...
