"""Plate entity - a customizable dish on a menu."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.section import MenuOption, MenuSection
from domain.menu.core.value_objects.variant import PlateVariant
from domain.shared.errors import ValidationFailedError


@dataclass
class Plate:
    """
    Entity: Dish with base price, base ingredients and customization sections.

    Example:
        Plate = "Croissant" (3.99)
        ├─ Section "Size" (required)  → Regular (+0), Large (+1.50)
        └─ Section "Filling" (optional, ingredient-dependent) → Chocolate (+1.00)

    Invariants:
    - base_price >= 0
    - variants is a derived cache of (base_price, base_ingredients, sections);
      it is regenerated whenever one of them changes, never patched

    Identity: Defined by id (unique within its menu)
    Mutability: Can be modified through the menu's plate commands
    """

    id: str
    name: str
    base_price: Decimal
    description: str = ""
    base_ingredients: List[Ingredient] = field(default_factory=list)
    image_url: str = ""
    active: bool = True
    sections: List[MenuSection] = field(default_factory=list)
    variants: List[PlateVariant] = field(default_factory=list)

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.base_price < 0:
            raise ValidationFailedError(f"Base price cannot be negative, got {self.base_price}")

        if self.created_at.tzinfo is None or self.updated_at.tzinfo is None:
            raise ValueError("Timestamps must be timezone-aware (use UTC)")

    def find_section(self, section_id: str) -> Optional[MenuSection]:
        """Return the section with the given id, or None."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def find_option(self, section_id: str, option_id: str) -> Optional[MenuOption]:
        """Return the option of the given section, or None if either is unknown."""
        section = self.find_section(section_id)
        if section is None:
            return None
        return section.find_option(option_id)

    def find_variant(self, variant_key: str) -> Optional[PlateVariant]:
        """Return the cached variant with the given key, or None."""
        for variant in self.variants:
            if variant.variant_key == variant_key:
                return variant
        return None

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
