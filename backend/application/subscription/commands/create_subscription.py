"""Create subscription command and handler."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from application.shared.result import OperationResult, execute
from application.subscription.dtos import CreateSubscriptionInput
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.events import SubscriptionCreated
from domain.subscription.core.factories import generate_subscription_number
from domain.subscription.services import BillingPolicy, build_schedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateSubscriptionCommand:
    """
    Command: Subscribe a customer to recurring meals from a restaurant.

    Attributes:
        payload: Subscription payload (camelCase, see CreateSubscriptionInput)
    """

    payload: Mapping[str, Any]


class CreateSubscriptionCommandHandler:
    """Handler for CreateSubscriptionCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: ISubscriptionRepository,
        event_bus: IEventBus,
        billing_policy: Optional[BillingPolicy] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        """
        Initialize handler.

        Args:
            store: Document store (transaction boundary)
            repository: Subscription repository port
            event_bus: Event bus port
            billing_policy: Delivery fee and tax rate (default: 5.99 / 8%)
            id_factory: Id generator for schedule entities
        """
        self._store = store
        self._repository = repository
        self._event_bus = event_bus
        self._billing_policy = billing_policy or BillingPolicy()
        self._id_factory = id_factory or new_id

    async def handle(self, command: CreateSubscriptionCommand) -> OperationResult[Subscription]:
        """
        Execute create command.

        Flow:
        1. Validate the envelope; build and price the schedule
        2. Compute billing and mint the subscription number
        3. Save the subscription as active
        4. Publish SubscriptionCreated

        The first delivery is the start date, or now if it already passed.
        """
        return await execute("create_subscription", lambda: self._create(command))

    async def _create(self, command: CreateSubscriptionCommand) -> Subscription:
        data = CreateSubscriptionInput.model_validate(command.payload)
        now = datetime.now(timezone.utc)

        schedule = build_schedule(data.schedule, now=now, id_factory=self._id_factory)

        subscription = Subscription(
            id=self._id_factory(),
            subscription_number=generate_subscription_number(now),
            customer_id=data.customer_id,
            restaurant_id=data.restaurant_id,
            frequency=data.frequency,
            schedule=schedule,
            delivery_address=data.delivery_address.to_domain(),
            billing=self._billing_policy.compute(schedule, data.frequency, now),
            payment_method=data.payment_method,
            start_date=data.start_date,
            end_date=data.end_date,
            next_delivery_date=max(data.start_date, now),
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            restaurant_name=data.restaurant_name,
            default_delivery_time=data.default_delivery_time,
            created_at=now,
            updated_at=now,
        )
        subscription.activate()

        async def create(tx: ITransaction) -> Subscription:
            await self._repository.save(subscription, tx)
            return subscription

        await self._store.run_transaction(create)

        logger.info(
            "Subscription created",
            extra={
                "subscription_id": subscription.id,
                "subscription_number": subscription.subscription_number,
                "customer_id": subscription.customer_id,
                "restaurant_id": subscription.restaurant_id,
                "billing_total": str(subscription.billing.total),
            },
        )

        await self._event_bus.publish(
            SubscriptionCreated.create(
                subscription_id=subscription.id,
                subscription_number=subscription.subscription_number,
                customer_id=subscription.customer_id,
                restaurant_id=subscription.restaurant_id,
            )
        )
        return subscription
