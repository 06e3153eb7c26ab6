"""Unit tests for subscription summaries."""

from datetime import datetime, timezone

from domain.subscription.core.value_objects.enums import SubscriptionFrequency
from domain.subscription.services import build_schedule, summarize_subscription
from payloads import day_payload, meal_payload, plate_item_payload, weekly_schedule_payload

NOW = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


class TestSummarizeSubscription:
    """Test summarize_subscription()."""

    def test_counts(self, make_subscription) -> None:
        summary = summarize_subscription(make_subscription())

        assert summary.total_days == 3
        assert summary.total_meals == 3
        assert summary.total_items == 4

    def test_most_ordered_plates(self, make_subscription) -> None:
        """Ranked by quantity; ties keep first-seen order."""
        summary = summarize_subscription(make_subscription())

        assert [(p.plate_id, p.count) for p in summary.most_ordered_plates] == [("p1", 2), ("p2", 2)]
        assert summary.most_ordered_plates[0].plate_name == "Bowl"

    def test_top_five_only(self, make_subscription) -> None:
        items = [plate_item_payload(f"p{i}", f"Plate {i}", 1.0, i) for i in range(1, 8)]
        schedule = build_schedule([day_payload("monday", [meal_payload("lunch", items)])], now=NOW)

        plates = summarize_subscription(make_subscription(schedule=schedule)).most_ordered_plates

        assert [p.plate_id for p in plates] == ["p7", "p6", "p5", "p4", "p3"]

    def test_skipped_days_ignored(self, make_subscription) -> None:
        raw = weekly_schedule_payload()
        raw[0]["skipDelivery"] = True
        schedule = build_schedule(raw, now=NOW)

        summary = summarize_subscription(make_subscription(schedule=schedule))

        assert summary.total_days == 2
        assert summary.total_items == 3

    def test_weekly_totals(self, make_subscription) -> None:
        subscription = make_subscription()
        summary = summarize_subscription(subscription)

        assert summary.weekly_total == subscription.billing.total
        assert summary.monthly_total == subscription.billing.total

    def test_monthly_totals(self, make_subscription) -> None:
        """Monthly cycles scale the weekly figure by four."""
        subscription = make_subscription(frequency=SubscriptionFrequency.MONTHLY)
        summary = summarize_subscription(subscription)

        assert summary.weekly_total == subscription.billing.total * 4
        assert summary.monthly_total == subscription.billing.total

    def test_daily_monthly_total_falls_back_to_weekly(self, make_subscription) -> None:
        subscription = make_subscription(frequency=SubscriptionFrequency.DAILY)
        summary = summarize_subscription(subscription)

        assert summary.monthly_total == summary.weekly_total == subscription.billing.total * 4
