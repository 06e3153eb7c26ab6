"""SubscriptionDelivery entity - history record of one delivery."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from domain.subscription.core.entities.meal import SubscriptionMeal
from domain.subscription.core.value_objects.enums import DayOfWeek, DeliveryStatus


@dataclass
class SubscriptionDelivery:
    """
    Entity: A delivery made (or attempted) for a subscription day.

    The meals are a snapshot of the scheduled day at delivery time and
    total is the sum of their meal totals.
    """

    id: str
    subscription_id: str
    delivery_date: datetime
    day_of_week: DayOfWeek
    delivery_status: DeliveryStatus
    total: Decimal
    meals: List[SubscriptionMeal] = field(default_factory=list)
    delivered_at: Optional[datetime] = None
    delivery_notes: Optional[str] = None

    @property
    def is_delivered(self) -> bool:
        return self.delivery_status == DeliveryStatus.DELIVERED
