"""Value objects for the subscription domain."""

from .enums import (
    DayOfWeek,
    DeliveryStatus,
    MealTime,
    ModificationAction,
    SubscriptionFrequency,
    SubscriptionStatus,
)
from .billing import Billing
from .delivery_address import Coordinates, DeliveryAddress
from .ingredient_modification import IngredientModification

__all__ = [
    "SubscriptionFrequency",
    "SubscriptionStatus",
    "DayOfWeek",
    "MealTime",
    "DeliveryStatus",
    "ModificationAction",
    "Billing",
    "Coordinates",
    "DeliveryAddress",
    "IngredientModification",
]
