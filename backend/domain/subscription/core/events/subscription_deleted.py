"""SubscriptionDeleted domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class SubscriptionDeleted(DomainEvent):
    """Domain event: a subscription document was removed.

    Its delivery history is kept.
    """

    subscription_id: str
    customer_id: str
    restaurant_id: str

    @classmethod
    def create(cls, subscription_id: str, customer_id: str, restaurant_id: str) -> "SubscriptionDeleted":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            subscription_id=subscription_id,
            customer_id=customer_id,
            restaurant_id=restaurant_id,
        )
