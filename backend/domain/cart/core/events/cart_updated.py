"""CartUpdated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class CartUpdated(DomainEvent):
    """Domain event: a cart's contents changed and were persisted.

    Attributes:
        cart_id: Changed cart.
        customer_id: Cart owner.
        total_items: Sum of item quantities after the change.
    """

    cart_id: str
    customer_id: str
    total_items: int

    @classmethod
    def create(cls, cart_id: str, customer_id: str, total_items: int) -> "CartUpdated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            cart_id=cart_id,
            customer_id=customer_id,
            total_items=total_items,
        )
