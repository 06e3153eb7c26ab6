"""Menu aggregate root - a restaurant's set of plates."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from domain.menu.core.entities.plate import Plate
from domain.shared.errors import NotFoundError


@dataclass
class Menu:
    """
    Aggregate Root: Restaurant menu with embedded plates.

    The whole menu, plates included, is stored as a single document so a
    plate edit and its regenerated variants are written atomically.

    Invariants:
    - Plate ids are unique within the menu

    Identity: Defined by id
    Mutability: Plates can be added, replaced and removed
    """

    id: str
    restaurant_id: str
    name: str
    description: str = ""
    active: bool = True
    plates: List[Plate] = field(default_factory=list)

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def find_plate(self, plate_id: str) -> Plate:
        """
        Return the plate with the given id.

        Raises:
            NotFoundError: If the plate is not in this menu
        """
        for plate in self.plates:
            if plate.id == plate_id:
                return plate
        raise NotFoundError(f"Plate {plate_id} not found in menu {self.id}")

    def add_plate(self, plate: Plate) -> None:
        if any(existing.id == plate.id for existing in self.plates):
            raise ValueError(f"Plate {plate.id} already exists in menu {self.id}")
        self.plates.append(plate)
        self.touch()

    def replace_plate(self, plate: Plate) -> None:
        """
        Replace the plate with the same id, keeping its position.

        Raises:
            NotFoundError: If the plate is not in this menu
        """
        for index, existing in enumerate(self.plates):
            if existing.id == plate.id:
                self.plates[index] = plate
                self.touch()
                return
        raise NotFoundError(f"Plate {plate.id} not found in menu {self.id}")

    def remove_plate(self, plate_id: str) -> None:
        """
        Remove a plate.

        Raises:
            NotFoundError: If the plate is not in this menu
        """
        remaining = [plate for plate in self.plates if plate.id != plate_id]
        if len(remaining) == len(self.plates):
            raise NotFoundError(f"Plate {plate_id} not found in menu {self.id}")
        self.plates = remaining
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
