"""Ingredient modification value object."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from domain.subscription.core.value_objects.enums import ModificationAction


@dataclass(frozen=True)
class IngredientModification:
    """A customer change to a plate's ingredients.

    Only ADD and EXTRA contribute their price_difference to the item cost.
    """

    ingredient_id: str
    ingredient_name: str
    action: ModificationAction
    price_difference: Optional[Decimal] = None

    @property
    def is_charged(self) -> bool:
        return self.action in (ModificationAction.ADD, ModificationAction.EXTRA)
