"""Subscription summary query."""

import logging
from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.services import SubscriptionSummary, summarize_subscription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetSubscriptionSummaryQuery:
    subscription_id: str


class GetSubscriptionSummaryQueryHandler:
    """Handler for GetSubscriptionSummaryQuery."""

    def __init__(self, repository: ISubscriptionRepository):
        self._repository = repository

    async def handle(self, query: GetSubscriptionSummaryQuery) -> OperationResult[SubscriptionSummary]:
        """
        Returns:
            OperationResult with day/meal/item counts, weekly and monthly
            totals and the five most ordered plates
        """
        return await execute("get_subscription_summary", lambda: self._summarize(query))

    async def _summarize(self, query: GetSubscriptionSummaryQuery) -> SubscriptionSummary:
        subscription = await self._repository.get_by_id(query.subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {query.subscription_id} not found")

        summary = summarize_subscription(subscription)
        logger.debug(
            "Subscription summarized",
            extra={
                "subscription_id": subscription.id,
                "total_days": summary.total_days,
                "total_items": summary.total_items,
            },
        )
        return summary
