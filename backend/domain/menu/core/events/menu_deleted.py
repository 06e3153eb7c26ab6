"""MenuDeleted domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class MenuDeleted(DomainEvent):
    """Domain event: a menu and all its plates were removed."""

    menu_id: str
    restaurant_id: str

    @classmethod
    def create(cls, menu_id: str, restaurant_id: str) -> "MenuDeleted":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            menu_id=menu_id,
            restaurant_id=restaurant_id,
        )
