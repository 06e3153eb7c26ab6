"""Subscription delivery repository over IDocumentStore.

Deliveries live in "subscription_deliveries", one document per delivery,
with a snapshot of the delivered meals.
"""

from typing import List, Optional

from domain.shared.ports.document_store import Document, IDocumentStore, ITransaction
from domain.subscription.core.entities.delivery import SubscriptionDelivery
from domain.subscription.core.value_objects.enums import DayOfWeek, DeliveryStatus
from infrastructure.persistence.repositories.base import DocumentRepository
from infrastructure.persistence.repositories.schedule_mapper import ScheduleMapper


class DeliveryRepository(DocumentRepository[SubscriptionDelivery]):
    """IDeliveryRepository implementation."""

    collection_name = "subscription_deliveries"

    def __init__(self, store: IDocumentStore):
        super().__init__(store)
        self._schedule = ScheduleMapper()

    async def save(self, delivery: SubscriptionDelivery, tx: Optional[ITransaction] = None) -> None:
        await self._store_entity(delivery, tx)

    async def list_by_subscription(self, subscription_id: str) -> List[SubscriptionDelivery]:
        deliveries = await self._query("subscriptionId", subscription_id)
        return sorted(deliveries, key=lambda d: d.delivery_date, reverse=True)

    def entity_id(self, entity: SubscriptionDelivery) -> str:
        return entity.id

    def to_document(self, entity: SubscriptionDelivery) -> Document:
        delivery = entity
        return {
            "id": delivery.id,
            "subscriptionId": delivery.subscription_id,
            "deliveryDate": self.datetime_to_iso(delivery.delivery_date),
            "dayOfWeek": delivery.day_of_week.value,
            "meals": [self._schedule.meal_to_dict(meal) for meal in delivery.meals],
            "deliveryStatus": delivery.delivery_status.value,
            "deliveredAt": self.datetime_to_iso(delivery.delivered_at),
            "deliveryNotes": delivery.delivery_notes,
            "total": self.money_to_number(delivery.total),
        }

    def from_document(self, doc: Document) -> SubscriptionDelivery:
        return SubscriptionDelivery(
            id=doc["id"],
            subscription_id=doc["subscriptionId"],
            delivery_date=self.iso_to_datetime(doc["deliveryDate"]),
            day_of_week=DayOfWeek(doc["dayOfWeek"]),
            meals=self._schedule.dicts_to_meals(doc.get("meals")),
            delivery_status=DeliveryStatus(doc.get("deliveryStatus", DeliveryStatus.SCHEDULED.value)),
            delivered_at=self.iso_to_datetime(doc.get("deliveredAt")),
            delivery_notes=doc.get("deliveryNotes"),
            total=self.number_to_money(doc.get("total")),
        )
