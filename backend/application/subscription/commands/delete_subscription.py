"""Delete subscription command and handler."""

import logging
from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.events import SubscriptionDeleted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteSubscriptionCommand:
    """Command: Remove a subscription in any status; deliveries already recorded stay."""

    subscription_id: str


class DeleteSubscriptionCommandHandler:
    """Handler for DeleteSubscriptionCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: ISubscriptionRepository,
        event_bus: IEventBus,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: DeleteSubscriptionCommand) -> OperationResult[None]:
        return await execute("delete_subscription", lambda: self._delete(command))

    async def _delete(self, command: DeleteSubscriptionCommand) -> None:
        async def delete(tx: ITransaction) -> Subscription:
            subscription = await self._repository.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")
            await self._repository.delete(subscription.id, tx)
            return subscription

        subscription = await self._store.run_transaction(delete)

        logger.info(
            "Subscription deleted",
            extra={
                "subscription_id": subscription.id,
                "status": subscription.status.value,
            },
        )
        await self._event_bus.publish(
            SubscriptionDeleted.create(
                subscription_id=subscription.id,
                customer_id=subscription.customer_id,
                restaurant_id=subscription.restaurant_id,
            )
        )
