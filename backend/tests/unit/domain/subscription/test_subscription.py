"""Unit tests for the Subscription aggregate."""

import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from domain.shared.errors import InvalidStatusTransitionError, NotFoundError, ValidationFailedError
from domain.subscription.core.factories import generate_subscription_number
from domain.subscription.core.factories.subscription_factory import to_base36
from domain.subscription.core.value_objects.enums import SubscriptionStatus
from domain.subscription.services import BillingPolicy, build_schedule
from payloads import weekly_schedule_payload

NOW = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


class TestStatusMachine:
    """Test Subscription status transitions."""

    def test_activate_pending(self, make_subscription) -> None:
        subscription = make_subscription(SubscriptionStatus.PENDING)
        subscription.activate()
        assert subscription.status == SubscriptionStatus.ACTIVE

    def test_pause_and_resume(self, make_subscription) -> None:
        """Resume installs the new billing and clears paused_until."""
        subscription = make_subscription()
        until = NOW + timedelta(days=14)

        subscription.pause(until)
        assert subscription.status == SubscriptionStatus.PAUSED
        assert subscription.paused_until == until

        later = NOW + timedelta(days=10)
        subscription.resume(BillingPolicy().compute(subscription.schedule, "weekly", later))

        assert subscription.status == SubscriptionStatus.ACTIVE
        assert subscription.paused_until is None
        assert subscription.billing.next_billing_date == later + timedelta(days=7)

    @pytest.mark.parametrize("status", [SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED])
    def test_cancel(self, make_subscription, status) -> None:
        subscription = make_subscription(status)
        subscription.cancel()
        assert subscription.status == SubscriptionStatus.CANCELLED

    def test_cancel_pending_rejected(self, make_subscription) -> None:
        subscription = make_subscription(SubscriptionStatus.PENDING)
        with pytest.raises(InvalidStatusTransitionError):
            subscription.cancel()
        assert subscription.status == SubscriptionStatus.PENDING

    def test_resume_active_rejected(self, make_subscription) -> None:
        subscription = make_subscription()
        with pytest.raises(InvalidStatusTransitionError):
            subscription.resume(subscription.billing)

    def test_pause_paused_rejected(self, make_subscription) -> None:
        subscription = make_subscription(SubscriptionStatus.PAUSED)
        with pytest.raises(InvalidStatusTransitionError):
            subscription.pause()

    @pytest.mark.parametrize("status", [SubscriptionStatus.CANCELLED, SubscriptionStatus.EXPIRED])
    def test_terminal_states_are_final(self, make_subscription, status) -> None:
        subscription = make_subscription(status)
        for transition in (subscription.activate, subscription.pause, subscription.cancel):
            with pytest.raises(InvalidStatusTransitionError):
                transition()

    def test_expire_after_end_date(self, make_subscription) -> None:
        subscription = make_subscription(end_date=NOW + timedelta(days=30))
        subscription.expire(NOW + timedelta(days=31))
        assert subscription.status == SubscriptionStatus.EXPIRED

    def test_expire_before_end_date_rejected(self, make_subscription) -> None:
        subscription = make_subscription(end_date=NOW + timedelta(days=30))
        with pytest.raises(InvalidStatusTransitionError):
            subscription.expire(NOW)
        assert subscription.status == SubscriptionStatus.ACTIVE

    def test_expire_without_end_date_rejected(self, make_subscription) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            make_subscription().expire(NOW)

    def test_transitions_leave_schedule_alone(self, make_subscription) -> None:
        subscription = make_subscription()
        schedule = subscription.schedule
        subscription.pause()
        subscription.cancel()
        assert subscription.schedule is schedule


class TestScheduleEdits:
    """Test schedule edits on the aggregate."""

    def test_replace_schedule(self, make_subscription) -> None:
        subscription = make_subscription()
        schedule = build_schedule(weekly_schedule_payload()[:1], subscription.schedule, NOW)

        subscription.replace_schedule(schedule, BillingPolicy().compute(schedule, "weekly", NOW))

        assert len(subscription.schedule) == 1
        assert subscription.billing.subtotal == Decimal("10.00")

    def test_terminal_subscription_rejects_edits(self, make_subscription) -> None:
        subscription = make_subscription(SubscriptionStatus.CANCELLED)
        with pytest.raises(ValidationFailedError):
            subscription.replace_schedule([], subscription.billing)
        with pytest.raises(ValidationFailedError):
            subscription.skip_delivery(date(2030, 1, 9))

    def test_skip_delivery_recorded_once(self, make_subscription) -> None:
        subscription = make_subscription()
        subscription.skip_delivery(date(2030, 1, 9))
        subscription.skip_delivery(date(2030, 1, 9))
        assert subscription.skipped_deliveries == [date(2030, 1, 9)]

    def test_skip_delivery_keeps_billing(self, make_subscription) -> None:
        subscription = make_subscription()
        billing = subscription.billing
        subscription.skip_delivery(date(2030, 1, 9))
        assert subscription.billing is billing

    def test_find_day(self, make_subscription) -> None:
        subscription = make_subscription()
        day = subscription.schedule[1]
        assert subscription.find_day(day.id) is day
        with pytest.raises(NotFoundError):
            subscription.find_day("missing")


class TestSubscriptionNumber:
    """Test generate_subscription_number()."""

    def test_format(self) -> None:
        number = generate_subscription_number(NOW, random.Random(7))
        prefix, stamp, suffix = number.split("-")

        assert prefix == "SUB"
        assert stamp == to_base36(int(NOW.timestamp() * 1000))
        assert len(suffix) == 6
        assert number == number.upper()

    def test_seeded_rng_is_reproducible(self) -> None:
        first = generate_subscription_number(NOW, random.Random(1))
        assert first == generate_subscription_number(NOW, random.Random(1))

    def test_base36(self) -> None:
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
