"""Persistence factory.

Environment-based document store selection:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory

All repositories share one store instance so that a transaction opened on
the store covers every aggregate it touches.

Usage:
    from infrastructure.persistence.factory import get_document_store, get_menu_repository

    store = get_document_store()
    menus = get_menu_repository()
"""

from typing import Optional

import structlog

from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.delivery_repository import IDeliveryRepository
from domain.shared.ports.document_store import IDocumentStore
from domain.shared.ports.menu_repository import IMenuRepository
from domain.shared.ports.subscription_repository import ISubscriptionRepository
from infrastructure.config import get_mongodb_uri, get_repository_backend
from infrastructure.persistence.in_memory.document_store import InMemoryDocumentStore
from infrastructure.persistence.repositories import (
    CartRepository,
    DeliveryRepository,
    MenuRepository,
    SubscriptionRepository,
)

logger = structlog.get_logger(__name__)


def create_document_store() -> IDocumentStore:
    """Create a document store based on REPOSITORY_BACKEND.

    Values:
        - "inmemory": InMemoryDocumentStore (default)
        - "mongodb": MongoDocumentStore (requires MONGODB_URI)

    Raises:
        ValueError: If mongodb is selected but MONGODB_URI is not set,
            or the backend name is unknown
    """
    backend = get_repository_backend()

    if backend == "mongodb":
        if not get_mongodb_uri():
            raise ValueError(
                "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
            )
        # motor is only needed when this backend is selected
        from infrastructure.persistence.mongodb.document_store import MongoDocumentStore

        logger.info("document_store_selected", backend=backend)
        return MongoDocumentStore()

    if backend != "inmemory":
        raise ValueError(f"Unknown REPOSITORY_BACKEND: {backend!r} (use inmemory or mongodb)")

    logger.info("document_store_selected", backend=backend)
    return InMemoryDocumentStore()


# Singleton instance (lazy initialization)
_document_store: Optional[IDocumentStore] = None


def get_document_store() -> IDocumentStore:
    """Shared document store instance."""
    global _document_store
    if _document_store is None:
        _document_store = create_document_store()
    return _document_store


def get_menu_repository() -> IMenuRepository:
    return MenuRepository(get_document_store())


def get_subscription_repository() -> ISubscriptionRepository:
    return SubscriptionRepository(get_document_store())


def get_cart_repository() -> ICartRepository:
    return CartRepository(get_document_store())


def get_delivery_repository() -> IDeliveryRepository:
    return DeliveryRepository(get_document_store())


def reset_document_store() -> None:
    """Drop the shared store so the next call re-reads the environment.

    Example:
        # In tests:
        reset_document_store()
        os.environ["REPOSITORY_BACKEND"] = "inmemory"
        store = get_document_store()  # Creates new instance
    """
    global _document_store
    _document_store = None
