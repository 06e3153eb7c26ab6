"""Update subscription meal command and handler."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.events import SubscriptionScheduleUpdated
from domain.subscription.services import BillingPolicy, replace_meal_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateMealCommand:
    """
    Command: Replace the plates of one meal of the schedule.

    Attributes:
        subscription_id: Subscription to update
        day_id: Schedule day holding the meal
        meal_id: Meal to update
        items: Plate item payloads; all items of the meal are replaced
        delivery_time: New delivery time (None keeps the current one)
        special_instructions: New instructions (None keeps the current ones)
    """

    subscription_id: str
    day_id: str
    meal_id: str
    items: List[Mapping[str, Any]] = field(default_factory=list)
    delivery_time: Optional[str] = None
    special_instructions: Optional[str] = None


class UpdateMealCommandHandler:
    """Handler for UpdateMealCommand."""

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

    async def handle(self, command: UpdateMealCommand) -> OperationResult[Subscription]:
        """
        Execute update command.

        Only the targeted meal changes; its day total and the subscription
        billing are recomputed. Unknown day or meal ids give NOT_FOUND.
        """
        return await execute("update_meal", lambda: self._update(command))

    async def _update(self, command: UpdateMealCommand) -> Subscription:
        async def update(tx: ITransaction) -> Subscription:
            subscription = await self._repository.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")

            now = datetime.now(timezone.utc)
            schedule = replace_meal_items(
                subscription.schedule,
                command.day_id,
                command.meal_id,
                command.items,
                delivery_time=command.delivery_time,
                special_instructions=command.special_instructions,
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
            "Subscription meal updated",
            extra={
                "subscription_id": subscription.id,
                "day_id": command.day_id,
                "meal_id": command.meal_id,
                "item_count": len(command.items),
            },
        )

        await self._event_bus.publish(
            SubscriptionScheduleUpdated.create(
                subscription_id=subscription.id,
                billing_total=subscription.billing.total,
            )
        )
        return subscription
