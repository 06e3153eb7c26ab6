"""Base document-store repository.

Common functionality of the aggregate repositories:
- entity ↔ document mapping hooks (to_document / from_document)
- reads and writes through either the store or an open transaction
- datetime, money, ingredient and address field conversions

Concrete repositories inherit from DocumentRepository and work unchanged
on every IDocumentStore backend.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar

import structlog

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.selection import SelectedOptionDetail
from domain.menu.services.ingredient_normalizer import normalize_ingredients
from domain.shared.money import to_decimal, to_number
from domain.shared.ports.document_store import Document, IDocumentStore, ITransaction
from domain.subscription.core.value_objects.delivery_address import Coordinates, DeliveryAddress

TEntity = TypeVar("TEntity")

logger = structlog.get_logger(__name__)


class DocumentRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for repositories over IDocumentStore.

    Subclasses must implement:
    - collection_name: Name of the collection
    - to_document(): Convert domain entity to document
    - from_document(): Convert document to domain entity

    Example:
        class MenuRepository(DocumentRepository[Menu]):
            collection_name = "menus"

            def to_document(self, menu: Menu) -> Document: ...
            def from_document(self, doc: Document) -> Menu: ...
    """

    collection_name: str = ""

    def __init__(self, store: IDocumentStore):
        self._store = store

    # ============================================================
    # Abstract Methods (must be implemented)
    # ============================================================

    @abstractmethod
    def to_document(self, entity: TEntity) -> Document:
        """Convert domain entity to document (camelCase field names)."""

    @abstractmethod
    def from_document(self, doc: Document) -> TEntity:
        """
        Convert document to domain entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """

    @abstractmethod
    def entity_id(self, entity: TEntity) -> str:
        """Id under which the entity is stored."""

    # ============================================================
    # Store / transaction access
    # ============================================================

    async def _load(self, doc_id: str, tx: Optional[ITransaction] = None) -> Optional[TEntity]:
        if tx is not None:
            doc = await tx.get(self.collection_name, doc_id)
        else:
            doc = await self._store.get_by_id(self.collection_name, doc_id)
        if doc is None:
            return None
        return self._map(doc)

    async def _store_entity(self, entity: TEntity, tx: Optional[ITransaction] = None) -> None:
        doc = self.to_document(entity)
        doc_id = self.entity_id(entity)
        if tx is not None:
            tx.set(self.collection_name, doc_id, doc)
        else:
            await self._store.set(self.collection_name, doc_id, doc)

    async def _delete_entity(self, doc_id: str, tx: Optional[ITransaction] = None) -> None:
        if tx is not None:
            tx.delete(self.collection_name, doc_id)
        else:
            await self._store.delete(self.collection_name, doc_id)

    async def _query(self, field: str, value: Any, limit: Optional[int] = None) -> List[TEntity]:
        docs = await self._store.query_by_equality(self.collection_name, field, value, limit)
        return [self._map(doc) for doc in docs]

    def _map(self, doc: Document) -> TEntity:
        try:
            return self.from_document(doc)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(
                "document_mapping_failed",
                collection=self.collection_name,
                doc_id=doc.get("id"),
                error=str(e),
            )
            raise

    # ============================================================
    # Field conversions (for subclasses)
    # ============================================================

    @staticmethod
    def datetime_to_iso(dt: Optional[datetime]) -> Optional[str]:
        """Timezone-aware datetime → ISO 8601 string (None passes through)."""
        if dt is None:
            return None
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        return dt.isoformat()

    @staticmethod
    def iso_to_datetime(value: Optional[str]) -> Optional[datetime]:
        """ISO 8601 string → timezone-aware datetime; naive values are UTC."""
        if not value:
            return None
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    @staticmethod
    def date_to_iso(value: date) -> str:
        return value.isoformat()

    @staticmethod
    def iso_to_date(value: str) -> date:
        return date.fromisoformat(value[:10])

    @staticmethod
    def money_to_number(value: Optional[Decimal]) -> Optional[float]:
        return None if value is None else to_number(value)

    @staticmethod
    def number_to_money(value: Any) -> Decimal:
        return to_decimal(value, strict=False)

    @staticmethod
    def ingredients_to_list(ingredients: Iterable[Ingredient]) -> List[Dict[str, Any]]:
        return [{"name": i.name, "obligatory": i.obligatory} for i in ingredients]

    @staticmethod
    def list_to_ingredients(raw: Any) -> List[Ingredient]:
        """Any historical ingredient shape → List[Ingredient]."""
        return normalize_ingredients(raw)

    @staticmethod
    def selected_option_to_dict(option: SelectedOptionDetail) -> Dict[str, Any]:
        return {
            "sectionId": option.section_id,
            "sectionName": option.section_name,
            "optionId": option.option_id,
            "optionName": option.option_name,
            "additionalCost": to_number(option.additional_cost),
        }

    @staticmethod
    def address_to_dict(address: DeliveryAddress) -> Dict[str, Any]:
        return {
            "id": address.id,
            "label": address.label,
            "address": address.address,
            "apartment": address.apartment,
            "city": address.city,
            "postalCode": address.postal_code,
            "instructions": address.instructions,
            "coordinates": (
                {"lat": address.coordinates.lat, "lng": address.coordinates.lng}
                if address.coordinates
                else None
            ),
            "isDefault": address.is_default,
        }

    @staticmethod
    def dict_to_address(data: Dict[str, Any]) -> DeliveryAddress:
        coordinates = data.get("coordinates")
        return DeliveryAddress(
            id=data.get("id", ""),
            label=data.get("label", ""),
            address=data.get("address", ""),
            apartment=data.get("apartment"),
            city=data.get("city", ""),
            postal_code=data.get("postalCode", ""),
            instructions=data.get("instructions"),
            coordinates=(
                Coordinates(lat=float(coordinates["lat"]), lng=float(coordinates["lng"]))
                if coordinates
                else None
            ),
            is_default=bool(data.get("isDefault", False)),
        )
