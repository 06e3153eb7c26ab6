"""SubscriptionPlateItem entity - one ordered plate inside a meal."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.selection import SelectedOptionDetail
from domain.shared.errors import ValidationFailedError
from domain.subscription.core.value_objects.ingredient_modification import (
    IngredientModification,
)


@dataclass
class SubscriptionPlateItem:
    """
    Entity: Plate ordered in a subscription meal.

    Pricing:
        total_price = (base_price + variant_price + options_cost + ingredients_cost) × quantity

    Invariants:
    - quantity > 0
    - base_price >= 0

    Identity: Defined by id; a fresh id is minted every time the owning
    meal is edited (items are replaced, not diffed).
    """

    id: str
    plate_id: str
    plate_name: str
    base_price: Decimal
    quantity: int
    total_price: Decimal
    added_at: datetime
    options_cost: Decimal = Decimal("0")
    ingredients_cost: Decimal = Decimal("0")
    plate_description: Optional[str] = None
    image_url: Optional[str] = None
    variant_id: Optional[str] = None
    variant_name: Optional[str] = None
    variant_price: Optional[Decimal] = None
    selected_options: List[SelectedOptionDetail] = field(default_factory=list)
    ingredient_modifications: List[IngredientModification] = field(default_factory=list)
    custom_ingredients: Optional[List[Ingredient]] = None
    notes: Optional[str] = None
    last_modified_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if self.quantity <= 0:
            raise ValidationFailedError(f"Quantity must be positive, got {self.quantity}")
        if self.base_price < 0:
            raise ValidationFailedError(f"Base price cannot be negative, got {self.base_price}")

    @property
    def unit_price(self) -> Decimal:
        """Price of a single unit before quantity."""
        return (
            self.base_price
            + (self.variant_price or Decimal("0"))
            + self.options_cost
            + self.ingredients_cost
        )

    def calculate_total(self) -> Decimal:
        return self.unit_price * self.quantity
