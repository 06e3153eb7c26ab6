"""Subscription repository over IDocumentStore.

Storage Strategy:
- Each Subscription is one document in "subscriptions" with the whole
  schedule (days → meals → items) embedded
- Optional fields are written as null rather than omitted
- skippedDeliveries stored as ISO dates ("2024-05-06")

Indexes (MongoDB):
- customerId: for customer subscription lists
- restaurantId: for restaurant subscription lists
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from domain.shared.ports.document_store import Document, IDocumentStore, ITransaction
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.value_objects.billing import Billing
from domain.subscription.core.value_objects.enums import SubscriptionFrequency, SubscriptionStatus
from infrastructure.persistence.repositories.base import DocumentRepository
from infrastructure.persistence.repositories.schedule_mapper import ScheduleMapper


class SubscriptionRepository(DocumentRepository[Subscription]):
    """ISubscriptionRepository implementation."""

    collection_name = "subscriptions"

    def __init__(self, store: IDocumentStore):
        super().__init__(store)
        self._schedule = ScheduleMapper()

    async def get_by_id(
        self,
        subscription_id: str,
        tx: Optional[ITransaction] = None,
    ) -> Optional[Subscription]:
        return await self._load(subscription_id, tx)

    async def save(self, subscription: Subscription, tx: Optional[ITransaction] = None) -> None:
        await self._store_entity(subscription, tx)

    async def list_by_customer(self, customer_id: str) -> List[Subscription]:
        return await self._query("customerId", customer_id)

    async def list_by_restaurant(self, restaurant_id: str) -> List[Subscription]:
        return await self._query("restaurantId", restaurant_id)

    async def delete(self, subscription_id: str, tx: Optional[ITransaction] = None) -> None:
        await self._delete_entity(subscription_id, tx)

    def entity_id(self, entity: Subscription) -> str:
        return entity.id

    # ============================================================
    # Document Mapping (Domain ↔ Document)
    # ============================================================

    def to_document(self, entity: Subscription) -> Document:
        sub = entity
        return {
            "id": sub.id,
            "subscriptionNumber": sub.subscription_number,
            "customerId": sub.customer_id,
            "customerName": sub.customer_name,
            "customerEmail": sub.customer_email,
            "restaurantId": sub.restaurant_id,
            "restaurantName": sub.restaurant_name,
            "frequency": sub.frequency.value,
            "schedule": [self._schedule.day_to_dict(day) for day in sub.schedule],
            "deliveryAddress": self.address_to_dict(sub.delivery_address),
            "defaultDeliveryTime": sub.default_delivery_time,
            "billing": self._billing_to_dict(sub.billing),
            "paymentMethod": sub.payment_method,
            "status": sub.status.value,
            "startDate": self.datetime_to_iso(sub.start_date),
            "endDate": self.datetime_to_iso(sub.end_date),
            "nextDeliveryDate": self.datetime_to_iso(sub.next_delivery_date),
            "pausedUntil": self.datetime_to_iso(sub.paused_until),
            "skippedDeliveries": [self.date_to_iso(d) for d in sub.skipped_deliveries],
            "lastDeliveredAt": self.datetime_to_iso(sub.last_delivered_at),
            "createdAt": self.datetime_to_iso(sub.created_at),
            "updatedAt": self.datetime_to_iso(sub.updated_at),
        }

    def from_document(self, doc: Document) -> Subscription:
        now = datetime.now(timezone.utc)
        return Subscription(
            id=doc["id"],
            subscription_number=doc.get("subscriptionNumber", ""),
            customer_id=doc["customerId"],
            customer_name=doc.get("customerName"),
            customer_email=doc.get("customerEmail"),
            restaurant_id=doc["restaurantId"],
            restaurant_name=doc.get("restaurantName"),
            frequency=SubscriptionFrequency.parse(doc.get("frequency")),
            schedule=[self._schedule.dict_to_day(day) for day in doc.get("schedule") or []],
            delivery_address=self.dict_to_address(doc.get("deliveryAddress") or {}),
            default_delivery_time=doc.get("defaultDeliveryTime"),
            billing=self._dict_to_billing(doc.get("billing") or {}, doc.get("frequency")),
            payment_method=doc.get("paymentMethod", ""),
            status=SubscriptionStatus(doc.get("status", SubscriptionStatus.PENDING.value)),
            start_date=self.iso_to_datetime(doc.get("startDate")) or now,
            end_date=self.iso_to_datetime(doc.get("endDate")),
            next_delivery_date=self.iso_to_datetime(doc.get("nextDeliveryDate")) or now,
            paused_until=self.iso_to_datetime(doc.get("pausedUntil")),
            skipped_deliveries=[self.iso_to_date(d) for d in doc.get("skippedDeliveries") or []],
            last_delivered_at=self.iso_to_datetime(doc.get("lastDeliveredAt")),
            created_at=self.iso_to_datetime(doc.get("createdAt")) or now,
            updated_at=self.iso_to_datetime(doc.get("updatedAt")) or now,
        )

    def _billing_to_dict(self, billing: Billing) -> Dict[str, Any]:
        return {
            "subtotal": self.money_to_number(billing.subtotal),
            "deliveryFee": self.money_to_number(billing.delivery_fee),
            "tax": self.money_to_number(billing.tax),
            "discount": self.money_to_number(billing.discount),
            "total": self.money_to_number(billing.total),
            "billingCycle": billing.billing_cycle.value,
            "nextBillingDate": self.datetime_to_iso(billing.next_billing_date),
        }

    def _dict_to_billing(self, data: Dict[str, Any], frequency: Any) -> Billing:
        discount = data.get("discount")
        return Billing(
            subtotal=self.number_to_money(data.get("subtotal")),
            delivery_fee=self.number_to_money(data.get("deliveryFee")),
            tax=self.number_to_money(data.get("tax")),
            discount=None if discount is None else self.number_to_money(discount),
            total=self.number_to_money(data.get("total")),
            billing_cycle=SubscriptionFrequency.parse(data.get("billingCycle", frequency)),
            next_billing_date=(
                self.iso_to_datetime(data.get("nextBillingDate")) or datetime.now(timezone.utc)
            ),
        )
