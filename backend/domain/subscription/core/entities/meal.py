"""SubscriptionMeal entity."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from domain.shared.money import money_sum
from domain.subscription.core.entities.plate_item import SubscriptionPlateItem
from domain.subscription.core.value_objects.enums import MealTime


@dataclass
class SubscriptionMeal:
    """
    Entity: One meal (breakfast, lunch or dinner) of a scheduled day.

    Invariants:
    - meal_total == Σ items.total_price

    Identity: Defined by id; kept across edits while the day keeps a
    meal of the same type.
    """

    id: str
    type: MealTime
    items: List[SubscriptionPlateItem] = field(default_factory=list)
    meal_total: Decimal = Decimal("0")
    delivery_time: Optional[str] = None
    special_instructions: Optional[str] = None
    completed: bool = False

    def calculate_total(self) -> Decimal:
        return money_sum(item.total_price for item in self.items)

    @property
    def item_count(self) -> int:
        """Number of ordered units (Σ quantities)."""
        return sum(item.quantity for item in self.items)
