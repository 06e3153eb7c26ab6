"""SubscriptionStatusChanged domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent
from domain.subscription.core.value_objects.enums import SubscriptionStatus


@dataclass(frozen=True)
class SubscriptionStatusChanged(DomainEvent):
    """Domain event: subscription moved to a new status.

    Examples:
        >>> event = SubscriptionStatusChanged.create(
        ...     subscription_id="abc",
        ...     previous_status=SubscriptionStatus.ACTIVE,
        ...     new_status=SubscriptionStatus.PAUSED,
        ... )
        >>> event.new_status.value
        'paused'
    """

    subscription_id: str
    previous_status: SubscriptionStatus
    new_status: SubscriptionStatus

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.previous_status == self.new_status:
            raise ValueError("Status change requires different statuses")

    @classmethod
    def create(
        cls,
        subscription_id: str,
        previous_status: SubscriptionStatus,
        new_status: SubscriptionStatus,
    ) -> "SubscriptionStatusChanged":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            subscription_id=subscription_id,
            previous_status=previous_status,
            new_status=new_status,
        )
