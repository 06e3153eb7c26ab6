"""OrderPlaced domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """Domain event: a cart was checked out into an order.

    Attributes:
        order_id: New order.
        order_number: Human-facing order code.
        customer_id: Ordering customer.
        restaurant_id: Restaurant preparing the order.
        cart_id: Cart that was checked out (now inactive).
        total: Amount charged.
    """

    order_id: str
    order_number: str
    customer_id: str
    restaurant_id: str
    cart_id: str
    total: Decimal

    @classmethod
    def create(
        cls,
        order_id: str,
        order_number: str,
        customer_id: str,
        restaurant_id: str,
        cart_id: str,
        total: Decimal,
    ) -> "OrderPlaced":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            order_id=order_id,
            order_number=order_number,
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            cart_id=cart_id,
            total=total,
        )
