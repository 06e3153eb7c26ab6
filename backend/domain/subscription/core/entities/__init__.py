"""Core entities for subscription domain."""

from .plate_item import SubscriptionPlateItem
from .meal import SubscriptionMeal
from .day import SubscriptionDay
from .subscription import Subscription
from .delivery import SubscriptionDelivery

__all__ = [
    "SubscriptionPlateItem",
    "SubscriptionMeal",
    "SubscriptionDay",
    "Subscription",
    "SubscriptionDelivery",
]
