"""Change subscription status command and handler.

Covers pause, resume, cancel and expire. The status machine lives on the
Subscription entity; this handler only loads, applies and persists.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.events import SubscriptionStatusChanged
from domain.subscription.services import BillingPolicy

logger = logging.getLogger(__name__)


class StatusAction(str, Enum):
    PAUSE = "pause"
    RESUME = "resume"
    CANCEL = "cancel"
    EXPIRE = "expire"


@dataclass(frozen=True)
class ChangeStatusCommand:
    """
    Command: Move a subscription through its status machine.

    Attributes:
        subscription_id: Subscription to change
        action: pause | resume | cancel | expire
        paused_until: Optional end of the pause (pause only)
    """

    subscription_id: str
    action: StatusAction
    paused_until: Optional[datetime] = None


class ChangeStatusCommandHandler:
    """Handler for ChangeStatusCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: ISubscriptionRepository,
        event_bus: IEventBus,
        billing_policy: Optional[BillingPolicy] = None,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus
        self._billing_policy = billing_policy or BillingPolicy()

    async def handle(self, command: ChangeStatusCommand) -> OperationResult[Subscription]:
        """
        Execute status change.

        Resume recomputes billing so the next billing date restarts from
        now. A transition not allowed from the current status gives
        INVALID_STATUS_TRANSITION and leaves the subscription unchanged.
        """
        return await execute(f"{command.action.value}_subscription", lambda: self._change(command))

    async def _change(self, command: ChangeStatusCommand) -> Subscription:
        previous = {}

        async def change(tx: ITransaction) -> Subscription:
            subscription = await self._repository.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")

            previous["status"] = subscription.status
            now = datetime.now(timezone.utc)

            if command.action == StatusAction.PAUSE:
                subscription.pause(command.paused_until)
            elif command.action == StatusAction.RESUME:
                subscription.resume(
                    self._billing_policy.compute(subscription.schedule, subscription.frequency, now)
                )
            elif command.action == StatusAction.CANCEL:
                subscription.cancel()
            else:
                subscription.expire(now)

            await self._repository.save(subscription, tx)
            return subscription

        subscription = await self._store.run_transaction(change)

        logger.info(
            "Subscription status changed",
            extra={
                "subscription_id": subscription.id,
                "previous_status": previous["status"].value,
                "new_status": subscription.status.value,
            },
        )

        await self._event_bus.publish(
            SubscriptionStatusChanged.create(
                subscription_id=subscription.id,
                previous_status=previous["status"],
                new_status=subscription.status,
            )
        )
        return subscription
