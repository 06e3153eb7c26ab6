"""OrderStatusChanged domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.order.core.value_objects.enums import OrderStatus
from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """Domain event: order moved to a new fulfilment status."""

    order_id: str
    customer_id: str
    previous_status: OrderStatus
    new_status: OrderStatus

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.previous_status == self.new_status:
            raise ValueError("Status change requires different statuses")

    @classmethod
    def create(
        cls,
        order_id: str,
        customer_id: str,
        previous_status: OrderStatus,
        new_status: OrderStatus,
    ) -> "OrderStatusChanged":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            order_id=order_id,
            customer_id=customer_id,
            previous_status=previous_status,
            new_status=new_status,
        )
