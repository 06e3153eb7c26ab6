"""SubscriptionScheduleUpdated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class SubscriptionScheduleUpdated(DomainEvent):
    """Domain event: schedule rebuilt and billing recomputed."""

    subscription_id: str
    billing_total: Decimal

    @classmethod
    def create(cls, subscription_id: str, billing_total: Decimal) -> "SubscriptionScheduleUpdated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            subscription_id=subscription_id,
            billing_total=billing_total,
        )
