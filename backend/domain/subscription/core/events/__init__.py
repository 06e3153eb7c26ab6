"""Domain events for subscription domain."""

from .subscription_created import SubscriptionCreated
from .subscription_deleted import SubscriptionDeleted
from .subscription_schedule_updated import SubscriptionScheduleUpdated
from .subscription_status_changed import SubscriptionStatusChanged

__all__ = [
    "SubscriptionCreated",
    "SubscriptionDeleted",
    "SubscriptionScheduleUpdated",
    "SubscriptionStatusChanged",
]
