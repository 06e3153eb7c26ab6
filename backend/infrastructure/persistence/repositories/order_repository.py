"""Order repository over IDocumentStore.

Storage Strategy:
- Each Order is one document in "orders" with its items and delivery
  address embedded
- Amounts are stored as computed at checkout and never recomputed on load

Indexes (MongoDB):
- customerId + createdAt: for order history
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from domain.menu.core.value_objects.selection import parse_selected_option
from domain.order.core.entities.order import Order, OrderItem
from domain.order.core.value_objects.enums import OrderStatus, PaymentStatus
from domain.shared.ports.document_store import Document, ITransaction
from infrastructure.persistence.repositories.base import DocumentRepository


class OrderRepository(DocumentRepository[Order]):
    """IOrderRepository implementation."""

    collection_name = "orders"

    async def get_by_id(self, order_id: str, tx: Optional[ITransaction] = None) -> Optional[Order]:
        return await self._load(order_id, tx)

    async def save(self, order: Order, tx: Optional[ITransaction] = None) -> None:
        await self._store_entity(order, tx)

    async def list_by_customer(self, customer_id: str) -> List[Order]:
        return await self._query("customerId", customer_id)

    def entity_id(self, entity: Order) -> str:
        return entity.id

    # ============================================================
    # Document Mapping (Domain ↔ Document)
    # ============================================================

    def to_document(self, entity: Order) -> Document:
        order = entity
        return {
            "id": order.id,
            "orderNumber": order.order_number,
            "customerId": order.customer_id,
            "customerName": order.customer_name,
            "customerPhone": order.customer_phone,
            "restaurantId": order.restaurant_id,
            "restaurantName": order.restaurant_name,
            "deliveryAddress": self.address_to_dict(order.delivery_address),
            "items": [self._item_to_dict(item) for item in order.items],
            "subtotal": self.money_to_number(order.subtotal),
            "deliveryFee": self.money_to_number(order.delivery_fee),
            "tax": self.money_to_number(order.tax),
            "total": self.money_to_number(order.total),
            "status": order.status.value,
            "estimatedDeliveryTime": self.datetime_to_iso(order.estimated_delivery_time),
            "actualDeliveryTime": self.datetime_to_iso(order.actual_delivery_time),
            "paymentMethod": order.payment_method,
            "paymentStatus": order.payment_status.value,
            "specialInstructions": order.special_instructions,
            "createdAt": self.datetime_to_iso(order.created_at),
            "updatedAt": self.datetime_to_iso(order.updated_at),
        }

    def from_document(self, doc: Document) -> Order:
        now = datetime.now(timezone.utc)
        return Order(
            id=doc["id"],
            order_number=doc.get("orderNumber", ""),
            customer_id=doc["customerId"],
            customer_name=doc.get("customerName") or "",
            customer_phone=doc.get("customerPhone"),
            restaurant_id=doc["restaurantId"],
            restaurant_name=doc.get("restaurantName") or "",
            delivery_address=self.dict_to_address(doc.get("deliveryAddress") or {}),
            items=[self._dict_to_item(item) for item in doc.get("items") or []],
            subtotal=self.number_to_money(doc.get("subtotal")),
            delivery_fee=self.number_to_money(doc.get("deliveryFee")),
            tax=self.number_to_money(doc.get("tax")),
            total=self.number_to_money(doc.get("total")),
            status=OrderStatus(doc.get("status", OrderStatus.PENDING.value)),
            estimated_delivery_time=self.iso_to_datetime(doc.get("estimatedDeliveryTime")),
            actual_delivery_time=self.iso_to_datetime(doc.get("actualDeliveryTime")),
            payment_method=doc.get("paymentMethod", ""),
            payment_status=PaymentStatus(doc.get("paymentStatus", PaymentStatus.PENDING.value)),
            special_instructions=doc.get("specialInstructions"),
            created_at=self.iso_to_datetime(doc.get("createdAt")) or now,
            updated_at=self.iso_to_datetime(doc.get("updatedAt")) or now,
        )

    def _item_to_dict(self, item: OrderItem) -> Dict[str, Any]:
        return {
            "id": item.id,
            "plateId": item.plate_id,
            "plateName": item.plate_name,
            "variantId": item.variant_id,
            "customIngredients": self.ingredients_to_list(item.custom_ingredients),
            "selectedOptions": [self.selected_option_to_dict(o) for o in item.selected_options],
            "quantity": item.quantity,
            "price": self.money_to_number(item.price),
            "imageUrl": item.image_url,
            "notes": item.notes,
        }

    def _dict_to_item(self, data: Dict[str, Any]) -> OrderItem:
        return OrderItem(
            id=data["id"],
            plate_id=data.get("plateId", ""),
            plate_name=data.get("plateName", ""),
            variant_id=data.get("variantId"),
            custom_ingredients=self.list_to_ingredients(data.get("customIngredients")),
            selected_options=[parse_selected_option(o) for o in data.get("selectedOptions") or []],
            quantity=int(data.get("quantity", 1)),
            price=self.number_to_money(data.get("price")),
            image_url=data.get("imageUrl"),
            notes=data.get("notes") or "",
        )
