"""Unit tests for billing aggregation."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.subscription.core.value_objects.enums import SubscriptionFrequency
from domain.subscription.services.billing_aggregator import (
    DEFAULT_DELIVERY_FEE,
    DEFAULT_TAX_RATE,
    BillingPolicy,
    compute_billing,
    next_billing_date,
)
from domain.subscription.services.schedule_builder import build_schedule
from payloads import day_payload, meal_payload, plate_item_payload, weekly_schedule_payload

NOW = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


class TestComputeBilling:
    """Test compute_billing()."""

    def test_three_active_days(self) -> None:
        """30.00 over three days, fee 5, tax 8%."""
        schedule = build_schedule(weekly_schedule_payload(), now=NOW)

        billing = compute_billing(schedule, "weekly", 5, 0.08, now=NOW)

        assert billing.subtotal == Decimal("30.00")
        assert billing.delivery_fee == Decimal("15.00")
        assert billing.tax == Decimal("2.40")
        assert billing.total == Decimal("47.40")
        assert billing.billing_cycle == SubscriptionFrequency.WEEKLY

    def test_skipped_days_excluded(self) -> None:
        """A skipped day adds neither subtotal nor a delivery fee."""
        raw = weekly_schedule_payload()
        raw[1]["skipDelivery"] = True
        schedule = build_schedule(raw, now=NOW)

        billing = compute_billing(schedule, "weekly", 5, 0.08, now=NOW)

        assert billing.subtotal == Decimal("20.00")
        assert billing.delivery_fee == Decimal("10.00")
        assert billing.tax == Decimal("1.60")
        assert billing.total == Decimal("31.60")

    def test_empty_schedule(self) -> None:
        billing = compute_billing([], "weekly", 5, 0.08, now=NOW)
        assert billing.total == Decimal("0.00")

    def test_amounts_rounded_half_up(self) -> None:
        """Each amount is rounded to cents before summing."""
        raw = [day_payload("monday", [meal_payload("lunch", [plate_item_payload(base_price=10.05)])])]
        schedule = build_schedule(raw, now=NOW)

        billing = compute_billing(schedule, "weekly", "1.005", "0.05", now=NOW)

        # tax 10.05 × 0.05 = 0.5025 → 0.50, fee 1.005 → 1.01
        assert billing.tax == Decimal("0.50")
        assert billing.delivery_fee == Decimal("1.01")
        assert billing.total == Decimal("11.56")

    def test_policy_defaults(self) -> None:
        schedule = build_schedule(weekly_schedule_payload(), now=NOW)

        billing = BillingPolicy().compute(schedule, "weekly", now=NOW)

        assert billing.delivery_fee == DEFAULT_DELIVERY_FEE * 3
        assert billing.tax == Decimal("30.00") * DEFAULT_TAX_RATE


class TestNextBillingDate:
    """Test next_billing_date()."""

    @pytest.mark.parametrize(
        "frequency,expected",
        [
            ("daily", datetime(2030, 1, 8, 9, 0, tzinfo=timezone.utc)),
            ("weekly", datetime(2030, 1, 14, 9, 0, tzinfo=timezone.utc)),
            ("biweekly", datetime(2030, 1, 21, 9, 0, tzinfo=timezone.utc)),
            ("monthly", datetime(2030, 2, 7, 9, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_cycles(self, frequency, expected) -> None:
        assert next_billing_date(frequency, NOW) == expected

    def test_monthly_clamps_to_month_end(self) -> None:
        """Jan 31 + 1 month lands on Feb 29 in a leap year."""
        result = next_billing_date("monthly", datetime(2024, 1, 31, tzinfo=timezone.utc))
        assert result == datetime(2024, 2, 29, tzinfo=timezone.utc)

    def test_unknown_frequency_is_weekly(self) -> None:
        assert next_billing_date("fortnightly", NOW) == datetime(2030, 1, 14, 9, 0, tzinfo=timezone.utc)
        billing = compute_billing([], "fortnightly", 5, 0.08, now=NOW)
        assert billing.billing_cycle == SubscriptionFrequency.WEEKLY
