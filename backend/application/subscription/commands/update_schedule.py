"""Update subscription schedule command and handler.

Read → recompute → conditional write: the schedule is rebuilt from the
payload against the stored one (day and meal ids survive, item ids are
fresh) and billing is recomputed from the whole new schedule.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError, ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.events import SubscriptionScheduleUpdated
from domain.subscription.services import BillingPolicy, build_schedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateScheduleCommand:
    """
    Command: Replace a subscription's weekly schedule.

    Attributes:
        subscription_id: Subscription to update
        schedule: Day payloads ({day, date?, meals, skipDelivery?})
    """

    subscription_id: str
    schedule: List[Mapping[str, Any]]


class UpdateScheduleCommandHandler:
    """Handler for UpdateScheduleCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: ISubscriptionRepository,
        event_bus: IEventBus,
        billing_policy: Optional[BillingPolicy] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus
        self._billing_policy = billing_policy or BillingPolicy()
        self._id_factory = id_factory or new_id

    async def handle(self, command: UpdateScheduleCommand) -> OperationResult[Subscription]:
        return await execute("update_schedule", lambda: self._update(command))

    async def _update(self, command: UpdateScheduleCommand) -> Subscription:
        if not command.schedule:
            raise ValidationFailedError("Schedule must contain at least one day")

        async def update(tx: ITransaction) -> Subscription:
            subscription = await self._repository.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")

            now = datetime.now(timezone.utc)
            schedule = build_schedule(
                command.schedule,
                previous_schedule=subscription.schedule,
                now=now,
                id_factory=self._id_factory,
            )
            subscription.replace_schedule(
                schedule,
                self._billing_policy.compute(schedule, subscription.frequency, now),
            )
            await self._repository.save(subscription, tx)
            return subscription

        subscription = await self._store.run_transaction(update)

        logger.info(
            "Subscription schedule updated",
            extra={
                "subscription_id": subscription.id,
                "days": len(subscription.schedule),
                "billing_total": str(subscription.billing.total),
            },
        )

        await self._event_bus.publish(
            SubscriptionScheduleUpdated.create(
                subscription_id=subscription.id,
                billing_total=subscription.billing.total,
            )
        )
        return subscription
