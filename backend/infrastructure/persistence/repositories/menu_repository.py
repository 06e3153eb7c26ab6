"""Menu repository over IDocumentStore.

Storage Strategy:
- Each Menu is one document in "menus"; plates, sections and the variant
  cache are embedded, so a plate edit and its regenerated variants are
  one write
- Money stored as JSON numbers, datetimes as ISO 8601 strings

Document Schema:
{
    "id": "menu-id",
    "restaurantId": "restaurant-id",
    "name": "Lunch",
    "description": "",
    "active": true,
    "plates": [
        {
            "id": "plate-id",
            "name": "Croissant",
            "description": "",
            "basePrice": 3.99,
            "baseIngredients": [{"name": "Flour", "obligatory": true}],
            "imageUrl": "",
            "active": true,
            "sections": [
                {"id": "...", "name": "Size", "required": true, "multiple": false,
                 "ingredientDependent": false,
                 "options": [{"id": "...", "name": "Large", "additionalCost": 1.5,
                              "ingredients": []}]}
            ],
            "variants": [
                {"id": "...", "variantKey": "sid:oid", "variantName": "Large",
                 "price": 5.49, "ingredients": [...], "active": true}
            ],
            "createdAt": "...",
            "updatedAt": "..."
        }
    ],
    "createdAt": "...",
    "updatedAt": "..."
}
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from domain.menu.core.entities.menu import Menu
from domain.menu.core.entities.plate import Plate
from domain.menu.core.factories.plate_factory import PlateFactory
from domain.menu.core.value_objects.section import MenuSection
from domain.menu.core.value_objects.variant import PlateVariant
from domain.shared.ports.document_store import Document, ITransaction
from infrastructure.persistence.repositories.base import DocumentRepository

RESTAURANTS_COLLECTION = "restaurants"


class MenuRepository(DocumentRepository[Menu]):
    """IMenuRepository implementation."""

    collection_name = "menus"

    async def get_by_id(self, menu_id: str, tx: Optional[ITransaction] = None) -> Optional[Menu]:
        return await self._load(menu_id, tx)

    async def save(self, menu: Menu, tx: Optional[ITransaction] = None) -> None:
        await self._store_entity(menu, tx)

    async def list_by_restaurant(self, restaurant_id: str) -> List[Menu]:
        return await self._query("restaurantId", restaurant_id)

    async def delete(self, menu_id: str, tx: Optional[ITransaction] = None) -> None:
        await self._delete_entity(menu_id, tx)

    async def restaurant_exists(self, restaurant_id: str, tx: Optional[ITransaction] = None) -> bool:
        if tx is not None:
            doc = await tx.get(RESTAURANTS_COLLECTION, restaurant_id)
        else:
            doc = await self._store.get_by_id(RESTAURANTS_COLLECTION, restaurant_id)
        return doc is not None

    def entity_id(self, entity: Menu) -> str:
        return entity.id

    # ============================================================
    # Document Mapping (Domain ↔ Document)
    # ============================================================

    def to_document(self, entity: Menu) -> Document:
        menu = entity
        return {
            "id": menu.id,
            "restaurantId": menu.restaurant_id,
            "name": menu.name,
            "description": menu.description,
            "active": menu.active,
            "plates": [self._plate_to_dict(plate) for plate in menu.plates],
            "createdAt": self.datetime_to_iso(menu.created_at),
            "updatedAt": self.datetime_to_iso(menu.updated_at),
        }

    def from_document(self, doc: Document) -> Menu:
        now = datetime.now(timezone.utc)
        return Menu(
            id=doc["id"],
            restaurant_id=doc["restaurantId"],
            name=doc.get("name", ""),
            description=doc.get("description", ""),
            active=bool(doc.get("active", True)),
            plates=[self._dict_to_plate(plate) for plate in doc.get("plates") or []],
            created_at=self.iso_to_datetime(doc.get("createdAt")) or now,
            updated_at=self.iso_to_datetime(doc.get("updatedAt")) or now,
        )

    def _plate_to_dict(self, plate: Plate) -> Dict[str, Any]:
        return {
            "id": plate.id,
            "name": plate.name,
            "description": plate.description,
            "basePrice": self.money_to_number(plate.base_price),
            "baseIngredients": self.ingredients_to_list(plate.base_ingredients),
            "imageUrl": plate.image_url,
            "active": plate.active,
            "sections": [self._section_to_dict(section) for section in plate.sections],
            "variants": [self._variant_to_dict(variant) for variant in plate.variants],
            "createdAt": self.datetime_to_iso(plate.created_at),
            "updatedAt": self.datetime_to_iso(plate.updated_at),
        }

    def _dict_to_plate(self, data: Dict[str, Any]) -> Plate:
        now = datetime.now(timezone.utc)
        return Plate(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            base_price=self.number_to_money(data.get("basePrice")),
            base_ingredients=self.list_to_ingredients(data.get("baseIngredients")),
            image_url=data.get("imageUrl") or "",
            active=bool(data.get("active", True)),
            # Stored sections carry their ids, so the factory keeps them
            sections=PlateFactory.create_sections(data.get("sections")),
            variants=[self._dict_to_variant(variant) for variant in data.get("variants") or []],
            created_at=self.iso_to_datetime(data.get("createdAt")) or now,
            updated_at=self.iso_to_datetime(data.get("updatedAt")) or now,
        )

    def _section_to_dict(self, section: MenuSection) -> Dict[str, Any]:
        return {
            "id": section.id,
            "name": section.name,
            "required": section.required,
            "multiple": section.multiple,
            "ingredientDependent": section.ingredient_dependent,
            "options": [
                {
                    "id": option.id,
                    "name": option.name,
                    "additionalCost": self.money_to_number(option.additional_cost),
                    "ingredients": self.ingredients_to_list(option.ingredients),
                }
                for option in section.options
            ],
        }

    def _variant_to_dict(self, variant: PlateVariant) -> Dict[str, Any]:
        return {
            "id": variant.id,
            "variantKey": variant.variant_key,
            "variantName": variant.variant_name,
            "price": self.money_to_number(variant.price),
            "ingredients": self.ingredients_to_list(variant.ingredients),
            "active": variant.active,
        }

    def _dict_to_variant(self, data: Dict[str, Any]) -> PlateVariant:
        return PlateVariant(
            id=data["id"],
            variant_key=data["variantKey"],
            variant_name=data.get("variantName", ""),
            price=self.number_to_money(data.get("price")),
            ingredients=tuple(self.list_to_ingredients(data.get("ingredients"))),
            active=bool(data.get("active", True)),
        )
