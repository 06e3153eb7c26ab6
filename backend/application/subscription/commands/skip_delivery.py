"""Skip delivery command and handler."""

import logging
from dataclasses import dataclass
from datetime import date

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkipDeliveryCommand:
    """
    Command: Skip the delivery of one calendar date.

    Skipping the same date twice records it once. Billing is unchanged:
    a skipped date is a one-off, unlike a schedule day with skipDelivery.
    """

    subscription_id: str
    delivery_date: date


class SkipDeliveryCommandHandler:
    """Handler for SkipDeliveryCommand."""

    def __init__(self, store: IDocumentStore, repository: ISubscriptionRepository):
        self._store = store
        self._repository = repository

    async def handle(self, command: SkipDeliveryCommand) -> OperationResult[Subscription]:
        return await execute("skip_delivery", lambda: self._skip(command))

    async def _skip(self, command: SkipDeliveryCommand) -> Subscription:
        async def skip(tx: ITransaction) -> Subscription:
            subscription = await self._repository.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")
            subscription.skip_delivery(command.delivery_date)
            await self._repository.save(subscription, tx)
            return subscription

        subscription = await self._store.run_transaction(skip)

        logger.info(
            "Delivery skipped",
            extra={
                "subscription_id": subscription.id,
                "delivery_date": command.delivery_date.isoformat(),
                "skipped_total": len(subscription.skipped_deliveries),
            },
        )
        return subscription
