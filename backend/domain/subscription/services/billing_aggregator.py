"""Billing aggregation for subscriptions."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Optional, Sequence

from dateutil.relativedelta import relativedelta

from domain.shared.money import money_sum, quantize_cents, to_decimal
from domain.subscription.core.entities.day import SubscriptionDay
from domain.subscription.core.value_objects.billing import Billing
from domain.subscription.core.value_objects.enums import SubscriptionFrequency

logger = logging.getLogger(__name__)


def next_billing_date(frequency: Any, now: Optional[datetime] = None) -> datetime:
    """
    Advance now by one billing cycle.

    daily +1 day, weekly +7 days, biweekly +14 days, monthly +1 calendar
    month (clamped to the last day of shorter months). Unrecognized
    frequencies are treated as weekly.

    Example:
        >>> next_billing_date("monthly", datetime(2024, 1, 31, tzinfo=timezone.utc))
        datetime.datetime(2024, 2, 29, 0, 0, tzinfo=datetime.timezone.utc)
    """
    now = now or datetime.now(timezone.utc)
    cycle = SubscriptionFrequency.parse(frequency)

    if cycle == SubscriptionFrequency.DAILY:
        return now + timedelta(days=1)
    if cycle == SubscriptionFrequency.BIWEEKLY:
        return now + timedelta(days=14)
    if cycle == SubscriptionFrequency.MONTHLY:
        return now + relativedelta(months=1)
    return now + timedelta(days=7)


def compute_billing(
    schedule: Sequence[SubscriptionDay],
    frequency: Any,
    delivery_fee_per_delivery: Any,
    tax_rate: Any,
    now: Optional[datetime] = None,
) -> Billing:
    """
    Roll a schedule up into one billing cycle.

    Formula:
        subtotal     = Σ day_total of days not skipped
        delivery_fee = count(days not skipped) × delivery_fee_per_delivery
        tax          = subtotal × tax_rate
        total        = subtotal + delivery_fee + tax

    Each amount is rounded to cents (half up) and total is the sum of
    the rounded amounts. Always recompute from the whole schedule;
    never patch a previous Billing.

    Args:
        schedule: Days with their totals already computed
        frequency: Billing cycle (unrecognized → weekly)
        delivery_fee_per_delivery: Fee charged per active day
        tax_rate: Fraction, e.g. 0.08
        now: Reference time for next_billing_date (default: now UTC)

    Returns:
        Billing

    Example:
        Three active days totaling 30.00, fee 5, tax 0.08:
        subtotal=30.00, delivery_fee=15.00, tax=2.40, total=47.40
    """
    active_days = [day for day in schedule if not day.skip_delivery]

    fee = to_decimal(delivery_fee_per_delivery)
    rate = to_decimal(tax_rate)

    subtotal = quantize_cents(money_sum(day.day_total for day in active_days))
    delivery_fee = quantize_cents(fee * len(active_days))
    tax = quantize_cents(subtotal * rate)

    billing = Billing(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        tax=tax,
        total=subtotal + delivery_fee + tax,
        billing_cycle=SubscriptionFrequency.parse(frequency),
        next_billing_date=next_billing_date(frequency, now),
    )

    logger.debug(
        "Billing computed",
        extra={
            "active_days": len(active_days),
            "subtotal": str(billing.subtotal),
            "total": str(billing.total),
        },
    )

    return billing


DEFAULT_DELIVERY_FEE = Decimal("5.99")
DEFAULT_TAX_RATE = Decimal("0.08")


@dataclass(frozen=True)
class BillingPolicy:
    """Delivery fee and tax rate applied when billing a schedule."""

    delivery_fee_per_delivery: Decimal = DEFAULT_DELIVERY_FEE
    tax_rate: Decimal = DEFAULT_TAX_RATE

    def compute(
        self,
        schedule: Sequence[SubscriptionDay],
        frequency: Any,
        now: Optional[datetime] = None,
    ) -> Billing:
        return compute_billing(
            schedule,
            frequency,
            self.delivery_fee_per_delivery,
            self.tax_rate,
            now,
        )
