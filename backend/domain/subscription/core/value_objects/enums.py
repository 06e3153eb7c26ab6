"""Enumerations of the subscription domain."""

from enum import Enum


class SubscriptionFrequency(str, Enum):
    """Billing cycle of a subscription."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: object) -> "SubscriptionFrequency":
        """Parse a raw value, defaulting to WEEKLY when unrecognized.

        Example:
            >>> SubscriptionFrequency.parse("fortnightly")
            <SubscriptionFrequency.WEEKLY: 'weekly'>
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.WEEKLY


class SubscriptionStatus(str, Enum):
    """Lifecycle status.

    - PENDING: created, not yet active
    - ACTIVE: deliveries running
    - PAUSED: deliveries suspended until resumed
    - CANCELLED: terminal, by customer
    - EXPIRED: terminal, end date passed
    """

    PENDING = "pending"
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self in (SubscriptionStatus.CANCELLED, SubscriptionStatus.EXPIRED)


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class MealTime(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class DeliveryStatus(str, Enum):
    SCHEDULED = "scheduled"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    FAILED = "failed"


class ModificationAction(str, Enum):
    """Ingredient modification on an ordered plate.

    - ADD: new ingredient (may cost extra)
    - REMOVE: drop a non-obligatory ingredient
    - EXTRA: extra portion (may cost extra)
    """

    ADD = "add"
    REMOVE = "remove"
    EXTRA = "extra"
