"""Subscription summary."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.value_objects.enums import SubscriptionFrequency

TOP_PLATES_LIMIT = 5


@dataclass(frozen=True)
class PlateCount:
    plate_id: str
    plate_name: str
    count: int


@dataclass(frozen=True)
class SubscriptionSummary:
    """Counts and totals of a subscription's active (non-skipped) days.

    weekly_total and monthly_total are approximations derived from the
    billing total: ×4 for non-weekly cycles, and monthly falls back to
    the weekly figure unless the cycle is monthly.
    """

    total_days: int
    total_meals: int
    total_items: int
    weekly_total: Decimal
    monthly_total: Decimal
    most_ordered_plates: Tuple[PlateCount, ...]


def summarize_subscription(subscription: Subscription) -> SubscriptionSummary:
    """Summarize a subscription's schedule and billing."""
    active_days = [day for day in subscription.schedule if not day.skip_delivery]

    counts: Dict[str, List] = {}
    total_items = 0
    for day in active_days:
        for meal in day.meals:
            for item in meal.items:
                total_items += item.quantity
                entry = counts.setdefault(item.plate_id, [item.plate_name, 0])
                entry[1] += item.quantity

    total = subscription.billing.total
    if subscription.frequency == SubscriptionFrequency.WEEKLY:
        weekly_total = total
    else:
        weekly_total = total * 4
    if subscription.frequency == SubscriptionFrequency.MONTHLY:
        monthly_total = total
    else:
        monthly_total = weekly_total

    # sorted() is stable: ties keep first-seen order
    ranked = sorted(counts.items(), key=lambda kv: kv[1][1], reverse=True)

    return SubscriptionSummary(
        total_days=len(active_days),
        total_meals=sum(len(day.meals) for day in active_days),
        total_items=total_items,
        weekly_total=weekly_total,
        monthly_total=monthly_total,
        most_ordered_plates=tuple(
            PlateCount(plate_id=plate_id, plate_name=name, count=count)
            for plate_id, (name, count) in ranked[:TOP_PLATES_LIMIT]
        ),
    )
