"""PlateVariant value object.

A variant is a precomputed, uniquely keyed combination of option
selections with its final price and ingredient list. The variants of a
plate are a derived cache, always regenerable from the plate's base
price, base ingredients and sections.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from domain.menu.core.value_objects.ingredient import Ingredient

DEFAULT_VARIANT_KEY = "default"
DEFAULT_VARIANT_NAME = "Standard"


@dataclass(frozen=True)
class PlateVariant:
    """Priced, ingredient-resolved combination of selected options.

    Attributes:
        id: Variant id (regenerated with the cache)
        variant_key: Canonical order-independent key of the selection set
        variant_name: Option names joined by ", " ("Standard" when empty)
        price: Base price plus the additional cost of every selected option
        ingredients: Final ingredient list, deduplicated by name
        active: Whether the variant can be ordered
    """

    id: str
    variant_key: str
    variant_name: str
    price: Decimal
    ingredients: Tuple[Ingredient, ...]
    active: bool = True

    @property
    def is_default(self) -> bool:
        return self.variant_key == DEFAULT_VARIANT_KEY
