"""Delivery history query."""

from dataclasses import dataclass
from typing import List

from application.shared.result import OperationResult, execute
from domain.shared.ports.delivery_repository import IDeliveryRepository
from domain.subscription.core.entities.delivery import SubscriptionDelivery

DEFAULT_HISTORY_LIMIT = 20


@dataclass(frozen=True)
class GetDeliveryHistoryQuery:
    subscription_id: str
    limit: int = DEFAULT_HISTORY_LIMIT


class GetDeliveryHistoryQueryHandler:
    """Handler for GetDeliveryHistoryQuery."""

    def __init__(self, repository: IDeliveryRepository):
        self._repository = repository

    async def handle(self, query: GetDeliveryHistoryQuery) -> OperationResult[List[SubscriptionDelivery]]:
        """Most recent deliveries first, at most query.limit of them."""
        return await execute("get_delivery_history", lambda: self._list(query))

    async def _list(self, query: GetDeliveryHistoryQuery) -> List[SubscriptionDelivery]:
        deliveries = await self._repository.list_by_subscription(query.subscription_id)
        return deliveries[: max(query.limit, 0)]
