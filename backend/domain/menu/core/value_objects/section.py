"""Customization sections and their options.

A section groups related options of a plate (e.g. "Size" with Regular and
Large). Options may add cost and, when the section is ingredient-dependent,
add ingredients to the plate.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.shared.money import ZERO


@dataclass(frozen=True)
class MenuOption:
    """One choice within a section.

    Attributes:
        id: Option id, unique within its plate
        name: Display name (e.g. "Large")
        additional_cost: Added to the plate price when selected
        ingredients: Only meaningful when the owning section is ingredient-dependent
    """

    id: str
    name: str
    additional_cost: Decimal = ZERO
    ingredients: Tuple[Ingredient, ...] = ()


@dataclass(frozen=True)
class MenuSection:
    """Named group of options on a plate.

    Selection rules:
    - required and not multiple: exactly one option
    - required and multiple: at least one option
    - not required: any number (at most one if not multiple)
    """

    id: str
    name: str
    required: bool = False
    multiple: bool = False
    ingredient_dependent: bool = False
    options: Tuple[MenuOption, ...] = ()

    def find_option(self, option_id: str) -> Optional[MenuOption]:
        """Return the option with the given id, or None."""
        for option in self.options:
            if option.id == option_id:
                return option
        return None
