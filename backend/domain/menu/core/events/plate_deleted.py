"""PlateDeleted domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class PlateDeleted(DomainEvent):
    """Domain event: a plate was removed from its menu."""

    menu_id: str
    plate_id: str

    @classmethod
    def create(cls, menu_id: str, plate_id: str) -> "PlateDeleted":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            menu_id=menu_id,
            plate_id=plate_id,
        )
