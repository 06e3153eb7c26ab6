"""Domain services for subscription scheduling and billing."""

from .schedule_builder import build_schedule, replace_meal_items
from .billing_aggregator import BillingPolicy, compute_billing, next_billing_date
from .summary import PlateCount, SubscriptionSummary, summarize_subscription

__all__ = [
    "build_schedule",
    "replace_meal_items",
    "BillingPolicy",
    "compute_billing",
    "next_billing_date",
    "PlateCount",
    "SubscriptionSummary",
    "summarize_subscription",
]
