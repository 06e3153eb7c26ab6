"""SubscriptionDay entity."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from domain.shared.money import ZERO, money_sum
from domain.subscription.core.entities.meal import SubscriptionMeal
from domain.subscription.core.value_objects.enums import DayOfWeek, MealTime


@dataclass
class SubscriptionDay:
    """
    Entity: One day of the weekly schedule.

    Invariants:
    - day_total == Σ meals.meal_total, or 0 when skip_delivery is set

    Identity: Defined by id; kept across edits for the same day of week.
    """

    id: str
    day: DayOfWeek
    meals: List[SubscriptionMeal] = field(default_factory=list)
    day_total: Decimal = Decimal("0")
    date: Optional[str] = None
    skip_delivery: bool = False

    def calculate_total(self) -> Decimal:
        if self.skip_delivery:
            return ZERO
        return money_sum(meal.meal_total for meal in self.meals)

    def find_meal(self, meal_id: str) -> Optional[SubscriptionMeal]:
        for meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None

    def find_meal_by_type(self, meal_type: MealTime) -> Optional[SubscriptionMeal]:
        for meal in self.meals:
            if meal.type == meal_type:
                return meal
        return None
