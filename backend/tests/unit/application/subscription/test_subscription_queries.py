"""Unit tests for subscription query handlers."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from application.subscription.queries import (
    GetCustomerSubscriptionsQuery,
    GetCustomerSubscriptionsQueryHandler,
    GetDeliveryHistoryQuery,
    GetDeliveryHistoryQueryHandler,
    GetRestaurantSubscriptionsQuery,
    GetRestaurantSubscriptionsQueryHandler,
    GetSubscriptionQuery,
    GetSubscriptionQueryHandler,
    GetSubscriptionSummaryQuery,
    GetSubscriptionSummaryQueryHandler,
)
from domain.subscription.core.entities.delivery import SubscriptionDelivery
from domain.subscription.core.value_objects.enums import DayOfWeek, DeliveryStatus, SubscriptionStatus
from infrastructure.persistence.repositories import DeliveryRepository, SubscriptionRepository

CREATED = datetime(2030, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def subscriptions(store) -> SubscriptionRepository:
    return SubscriptionRepository(store)


class TestGetSubscriptions:
    """Test single and per-customer lookups."""

    @pytest.mark.asyncio
    async def test_get_by_id(self, subscriptions, make_subscription) -> None:
        await subscriptions.save(make_subscription())

        result = await GetSubscriptionQueryHandler(subscriptions).handle(GetSubscriptionQuery("sub-1"))

        assert result.data.id == "sub-1"

    @pytest.mark.asyncio
    async def test_get_unknown(self, subscriptions) -> None:
        result = await GetSubscriptionQueryHandler(subscriptions).handle(GetSubscriptionQuery("nope"))
        assert result.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_customer_subscriptions_newest_first(self, subscriptions, make_subscription) -> None:
        await subscriptions.save(make_subscription(id="old", created_at=CREATED))
        await subscriptions.save(make_subscription(id="new", created_at=CREATED + timedelta(days=3)))
        await subscriptions.save(make_subscription(id="other", customer_id="cust-2"))

        result = await GetCustomerSubscriptionsQueryHandler(subscriptions).handle(
            GetCustomerSubscriptionsQuery("cust-1")
        )

        assert [s.id for s in result.data] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_customer_without_subscriptions(self, subscriptions) -> None:
        result = await GetCustomerSubscriptionsQueryHandler(subscriptions).handle(
            GetCustomerSubscriptionsQuery("nobody")
        )
        assert result.success
        assert result.data == []


class TestRestaurantSubscriptions:
    """Test GetRestaurantSubscriptionsQueryHandler."""

    async def _seed(self, subscriptions, make_subscription) -> None:
        statuses = [SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED, SubscriptionStatus.ACTIVE]
        for day, status in enumerate(statuses):
            await subscriptions.save(
                make_subscription(status, id=f"sub-{day}", customer_id=f"cust-{day}", created_at=CREATED + timedelta(days=day))
            )
        await subscriptions.save(make_subscription(id="elsewhere", restaurant_id="rest-2"))

    @pytest.mark.asyncio
    async def test_newest_first(self, subscriptions, make_subscription) -> None:
        await self._seed(subscriptions, make_subscription)

        result = await GetRestaurantSubscriptionsQueryHandler(subscriptions).handle(
            GetRestaurantSubscriptionsQuery("rest-1")
        )

        assert [s.id for s in result.data] == ["sub-2", "sub-1", "sub-0"]

    @pytest.mark.asyncio
    async def test_status_filter(self, subscriptions, make_subscription) -> None:
        await self._seed(subscriptions, make_subscription)

        result = await GetRestaurantSubscriptionsQueryHandler(subscriptions).handle(
            GetRestaurantSubscriptionsQuery("rest-1", statuses=[SubscriptionStatus.ACTIVE])
        )

        assert [s.id for s in result.data] == ["sub-2", "sub-0"]

    @pytest.mark.asyncio
    async def test_limit_applies_before_status_filter(self, subscriptions, make_subscription) -> None:
        await self._seed(subscriptions, make_subscription)

        result = await GetRestaurantSubscriptionsQueryHandler(subscriptions).handle(
            GetRestaurantSubscriptionsQuery("rest-1", statuses=[SubscriptionStatus.ACTIVE], limit=2)
        )

        assert [s.id for s in result.data] == ["sub-2"]


class TestSummaryAndHistory:
    """Test summary and delivery history queries."""

    @pytest.mark.asyncio
    async def test_summary(self, subscriptions, make_subscription) -> None:
        subscription = make_subscription()
        await subscriptions.save(subscription)

        result = await GetSubscriptionSummaryQueryHandler(subscriptions).handle(GetSubscriptionSummaryQuery("sub-1"))

        assert result.data.total_days == 3
        assert result.data.weekly_total == subscription.billing.total

    @pytest.mark.asyncio
    async def test_summary_unknown(self, subscriptions) -> None:
        result = await GetSubscriptionSummaryQueryHandler(subscriptions).handle(GetSubscriptionSummaryQuery("nope"))
        assert result.error_code == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_history_limit(self, store) -> None:
        deliveries = DeliveryRepository(store)
        for day_offset in range(5):
            await deliveries.save(
                SubscriptionDelivery(
                    id=f"d{day_offset}",
                    subscription_id="sub-1",
                    delivery_date=CREATED + timedelta(days=day_offset),
                    day_of_week=DayOfWeek.MONDAY,
                    delivery_status=DeliveryStatus.DELIVERED,
                    total=Decimal("10"),
                )
            )

        result = await GetDeliveryHistoryQueryHandler(deliveries).handle(GetDeliveryHistoryQuery("sub-1", limit=2))

        assert [d.id for d in result.data] == ["d4", "d3"]
