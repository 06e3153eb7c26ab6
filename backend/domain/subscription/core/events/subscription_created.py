"""SubscriptionCreated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class SubscriptionCreated(DomainEvent):
    """Domain event: a subscription was created and persisted.

    Attributes:
        subscription_id: Id of the new subscription.
        subscription_number: Human-facing code ("SUB-...").
        customer_id: Subscribing customer.
        restaurant_id: Restaurant delivering the meals.
    """

    subscription_id: str
    subscription_number: str
    customer_id: str
    restaurant_id: str

    @classmethod
    def create(
        cls,
        subscription_id: str,
        subscription_number: str,
        customer_id: str,
        restaurant_id: str,
    ) -> "SubscriptionCreated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            subscription_id=subscription_id,
            subscription_number=subscription_number,
            customer_id=customer_id,
            restaurant_id=restaurant_id,
        )
