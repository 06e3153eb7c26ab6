"""PlateVariantsRegenerated domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent


@dataclass(frozen=True)
class PlateVariantsRegenerated(DomainEvent):
    """Domain event: a plate's variant cache was rebuilt and persisted.

    Attributes:
        menu_id: Menu owning the plate.
        plate_id: Plate whose variants were rebuilt.
        variant_count: Number of variants now cached.
    """

    menu_id: str
    plate_id: str
    variant_count: int

    @classmethod
    def create(cls, menu_id: str, plate_id: str, variant_count: int) -> "PlateVariantsRegenerated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            menu_id=menu_id,
            plate_id=plate_id,
            variant_count=variant_count,
        )
