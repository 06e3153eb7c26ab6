"""Billing value object."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from domain.subscription.core.value_objects.enums import SubscriptionFrequency


@dataclass(frozen=True)
class Billing:
    """Value object for the billing of one subscription cycle.

    Attributes:
        subtotal: Sum of the day totals of active (non-skipped) days
        delivery_fee: Active days × fee per delivery
        tax: subtotal × tax rate
        total: subtotal + delivery_fee + tax
        billing_cycle: Frequency the amounts refer to
        next_billing_date: When the next charge is due (UTC)
        discount: Promotional discount, carried but not applied

    Always recomputed as a whole, never patched.
    """

    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal
    billing_cycle: SubscriptionFrequency
    next_billing_date: datetime
    discount: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if self.next_billing_date.tzinfo is None:
            raise ValueError("next_billing_date must be timezone-aware (use UTC)")
