"""Subscription read queries."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.value_objects.enums import SubscriptionStatus

DEFAULT_RESTAURANT_LIMIT = 50


@dataclass(frozen=True)
class GetSubscriptionQuery:
    subscription_id: str


@dataclass(frozen=True)
class GetCustomerSubscriptionsQuery:
    customer_id: str


@dataclass(frozen=True)
class GetRestaurantSubscriptionsQuery:
    """
    Attributes:
        restaurant_id: Restaurant whose subscribers are listed
        statuses: Keep only these statuses (None or empty: all)
        limit: Newest subscriptions considered before the status filter
    """

    restaurant_id: str
    statuses: Optional[Sequence[SubscriptionStatus]] = None
    limit: int = DEFAULT_RESTAURANT_LIMIT


class GetSubscriptionQueryHandler:
    """Handler for GetSubscriptionQuery."""

    def __init__(self, repository: ISubscriptionRepository):
        self._repository = repository

    async def handle(self, query: GetSubscriptionQuery) -> OperationResult[Subscription]:
        return await execute("get_subscription", lambda: self._get(query))

    async def _get(self, query: GetSubscriptionQuery) -> Subscription:
        subscription = await self._repository.get_by_id(query.subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {query.subscription_id} not found")
        return subscription


class GetCustomerSubscriptionsQueryHandler:
    """Handler for GetCustomerSubscriptionsQuery (newest first)."""

    def __init__(self, repository: ISubscriptionRepository):
        self._repository = repository

    async def handle(self, query: GetCustomerSubscriptionsQuery) -> OperationResult[List[Subscription]]:
        return await execute("get_customer_subscriptions", lambda: self._list(query))

    async def _list(self, query: GetCustomerSubscriptionsQuery) -> List[Subscription]:
        subscriptions = await self._repository.list_by_customer(query.customer_id)
        return sorted(subscriptions, key=lambda s: s.created_at, reverse=True)


class GetRestaurantSubscriptionsQueryHandler:
    """Handler for GetRestaurantSubscriptionsQuery (newest first)."""

    def __init__(self, repository: ISubscriptionRepository):
        self._repository = repository

    async def handle(self, query: GetRestaurantSubscriptionsQuery) -> OperationResult[List[Subscription]]:
        return await execute("get_restaurant_subscriptions", lambda: self._list(query))

    async def _list(self, query: GetRestaurantSubscriptionsQuery) -> List[Subscription]:
        subscriptions = await self._repository.list_by_restaurant(query.restaurant_id)
        newest = sorted(subscriptions, key=lambda s: s.created_at, reverse=True)[: query.limit]
        if query.statuses:
            wanted = set(query.statuses)
            newest = [s for s in newest if s.status in wanted]
        return newest
