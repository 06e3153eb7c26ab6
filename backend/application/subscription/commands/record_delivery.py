"""Record delivery command and handler."""

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from application.shared.result import OperationResult, execute
from domain.shared.errors import NotFoundError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.money import money_sum
from domain.shared.ports.delivery_repository import IDeliveryRepository
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.delivery import SubscriptionDelivery
from domain.subscription.core.value_objects.enums import DeliveryStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordDeliveryCommand:
    """
    Command: Record a delivery of one schedule day.

    The delivery keeps a copy of the day's meals as they were when
    delivered, so later schedule edits do not rewrite history.

    Attributes:
        subscription_id: Subscription delivered
        day_id: Schedule day the delivery corresponds to
        delivery_date: Date and time of the delivery slot
        delivery_status: Status to record (default: scheduled)
        delivered_at: When it was delivered (default: now, if delivered)
        delivery_notes: Free-text notes from the courier or restaurant
    """

    subscription_id: str
    day_id: str
    delivery_date: datetime
    delivery_status: DeliveryStatus = DeliveryStatus.SCHEDULED
    delivered_at: Optional[datetime] = None
    delivery_notes: Optional[str] = None


class RecordDeliveryCommandHandler:
    """Handler for RecordDeliveryCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        subscriptions: ISubscriptionRepository,
        deliveries: IDeliveryRepository,
        id_factory: Optional[IdFactory] = None,
    ):
        self._store = store
        self._subscriptions = subscriptions
        self._deliveries = deliveries
        self._id_factory = id_factory or new_id

    async def handle(self, command: RecordDeliveryCommand) -> OperationResult[SubscriptionDelivery]:
        """
        Execute record command.

        The delivery total is the sum of the day's meal totals. A delivered
        status also stamps the subscription's last_delivered_at, in the
        same transaction.
        """
        return await execute("record_delivery", lambda: self._record(command))

    async def _record(self, command: RecordDeliveryCommand) -> SubscriptionDelivery:
        async def record(tx: ITransaction) -> SubscriptionDelivery:
            subscription = await self._subscriptions.get_by_id(command.subscription_id, tx)
            if subscription is None:
                raise NotFoundError(f"Subscription {command.subscription_id} not found")
            day = subscription.find_day(command.day_id)

            delivered = command.delivery_status == DeliveryStatus.DELIVERED
            delivered_at = command.delivered_at
            if delivered and delivered_at is None:
                delivered_at = datetime.now(timezone.utc)

            meals = copy.deepcopy(day.meals)
            delivery = SubscriptionDelivery(
                id=self._id_factory(),
                subscription_id=subscription.id,
                delivery_date=command.delivery_date,
                day_of_week=day.day,
                delivery_status=command.delivery_status,
                total=money_sum(meal.meal_total for meal in meals),
                meals=meals,
                delivered_at=delivered_at,
                delivery_notes=command.delivery_notes,
            )
            await self._deliveries.save(delivery, tx)

            if delivered:
                subscription.mark_delivered(delivered_at)
                await self._subscriptions.save(subscription, tx)
            return delivery

        delivery = await self._store.run_transaction(record)

        logger.info(
            "Delivery recorded",
            extra={
                "subscription_id": command.subscription_id,
                "delivery_id": delivery.id,
                "status": delivery.delivery_status.value,
                "total": str(delivery.total),
            },
        )
        return delivery
