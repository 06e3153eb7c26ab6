"""Shopping cart repository over IDocumentStore.

Carts live in "shoppingCarts"; a customer has at most one document with
active == true. Derived totals (totalItems, subtotal, total) are written
for readers of the raw documents and ignored on load.

The active cart of a customer is found through a marker document in
"activeCarts" keyed by customer id ({customerId, cartId}). Reading the
marker through a transaction records it, so two transactions that both
create a first cart for the same customer conflict on the marker.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.cart.core.entities.cart import CartItem, ShoppingCart
from domain.menu.core.value_objects.selection import parse_selected_option
from domain.shared.ports.document_store import Document, ITransaction
from infrastructure.persistence.repositories.base import DocumentRepository

ACTIVE_CARTS_COLLECTION = "activeCarts"


class CartRepository(DocumentRepository[ShoppingCart]):
    """ICartRepository implementation."""

    collection_name = "shoppingCarts"

    async def get_by_id(self, cart_id: str, tx: Optional[ITransaction] = None) -> Optional[ShoppingCart]:
        return await self._load(cart_id, tx)

    async def find_active(
        self,
        customer_id: str,
        tx: Optional[ITransaction] = None,
    ) -> Optional[ShoppingCart]:
        marker = await self._get_marker(customer_id, tx)
        if marker is None:
            return await self._find_unmarked(customer_id, tx)
        cart = await self._load(marker["cartId"], tx)
        if cart is None or not cart.active:
            return None
        return cart

    async def save(self, cart: ShoppingCart, tx: Optional[ITransaction] = None) -> None:
        await self._store_entity(cart, tx)
        if cart.active:
            await self._set_marker(cart, tx)
            return
        marker = await self._get_marker(cart.customer_id, tx)
        if marker is not None and marker.get("cartId") == cart.id:
            await self._delete_marker(cart.customer_id, tx)

    async def _find_unmarked(
        self,
        customer_id: str,
        tx: Optional[ITransaction],
    ) -> Optional[ShoppingCart]:
        # Carts written before markers existed; the next save marks them
        docs = await self._store.query_by_equality(self.collection_name, "customerId", customer_id)
        active = [doc for doc in docs if doc.get("active", True)]
        if not active:
            return None
        cart = await self._load(active[0]["id"], tx)
        return cart if cart is not None and cart.active else None

    async def _get_marker(self, customer_id: str, tx: Optional[ITransaction]) -> Optional[Document]:
        if tx is not None:
            return await tx.get(ACTIVE_CARTS_COLLECTION, customer_id)
        return await self._store.get_by_id(ACTIVE_CARTS_COLLECTION, customer_id)

    async def _set_marker(self, cart: ShoppingCart, tx: Optional[ITransaction]) -> None:
        marker = {"customerId": cart.customer_id, "cartId": cart.id}
        if tx is not None:
            tx.set(ACTIVE_CARTS_COLLECTION, cart.customer_id, marker)
        else:
            await self._store.set(ACTIVE_CARTS_COLLECTION, cart.customer_id, marker)

    async def _delete_marker(self, customer_id: str, tx: Optional[ITransaction]) -> None:
        if tx is not None:
            tx.delete(ACTIVE_CARTS_COLLECTION, customer_id)
        else:
            await self._store.delete(ACTIVE_CARTS_COLLECTION, customer_id)

    def entity_id(self, entity: ShoppingCart) -> str:
        return entity.id

    def to_document(self, entity: ShoppingCart) -> Document:
        cart = entity
        return {
            "id": cart.id,
            "customerId": cart.customer_id,
            "restaurantId": cart.restaurant_id,
            "restaurantName": cart.restaurant_name,
            "items": [self._item_to_dict(item) for item in cart.items],
            "active": cart.active,
            "deliveryFee": self.money_to_number(cart.delivery_fee),
            "tax": self.money_to_number(cart.tax),
            "totalItems": cart.total_items,
            "subtotal": self.money_to_number(cart.subtotal),
            "total": self.money_to_number(cart.total),
            "createdAt": self.datetime_to_iso(cart.created_at),
            "updatedAt": self.datetime_to_iso(cart.updated_at),
        }

    def from_document(self, doc: Document) -> ShoppingCart:
        now = datetime.now(timezone.utc)
        return ShoppingCart(
            id=doc["id"],
            customer_id=doc["customerId"],
            restaurant_id=doc.get("restaurantId") or "",
            restaurant_name=doc.get("restaurantName") or "",
            items=[self._dict_to_item(item) for item in doc.get("items") or []],
            delivery_fee=self.number_to_money(doc.get("deliveryFee")),
            tax=self.number_to_money(doc.get("tax")),
            active=bool(doc.get("active", True)),
            created_at=self.iso_to_datetime(doc.get("createdAt")) or now,
            updated_at=self.iso_to_datetime(doc.get("updatedAt")) or now,
        )

    def _item_to_dict(self, item: CartItem) -> Dict[str, Any]:
        return {
            "id": item.id,
            "menuId": item.menu_id,
            "plateId": item.plate_id,
            "plateName": item.plate_name,
            "variantId": item.variant_id,
            "customIngredients": self.ingredients_to_list(item.custom_ingredients),
            "selectedOptions": [self.selected_option_to_dict(o) for o in item.selected_options],
            "quantity": item.quantity,
            "price": self.money_to_number(item.price),
            "imageUrl": item.image_url,
            "restaurantId": item.restaurant_id,
            "restaurantName": item.restaurant_name,
            "notes": item.notes,
            "addedAt": self.datetime_to_iso(item.added_at),
        }

    def _dict_to_item(self, data: Dict[str, Any]) -> CartItem:
        return CartItem(
            id=data["id"],
            menu_id=data.get("menuId", ""),
            plate_id=data.get("plateId", ""),
            plate_name=data.get("plateName", ""),
            variant_id=data.get("variantId"),
            custom_ingredients=self.list_to_ingredients(data.get("customIngredients")),
            selected_options=[parse_selected_option(o) for o in data.get("selectedOptions") or []],
            quantity=int(data.get("quantity", 1)),
            price=self.number_to_money(data.get("price")),
            image_url=data.get("imageUrl"),
            restaurant_id=data.get("restaurantId", ""),
            restaurant_name=data.get("restaurantName", ""),
            notes=data.get("notes") or "",
            added_at=self.iso_to_datetime(data.get("addedAt")) or datetime.now(timezone.utc),
        )
