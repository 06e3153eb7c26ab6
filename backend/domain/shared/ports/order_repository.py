"""Order repository port (interface)."""

from typing import List, Optional, Protocol

from domain.order.core.entities.order import Order
from domain.shared.ports.document_store import ITransaction


class IOrderRepository(Protocol):
    """Interface for order persistence operations."""

    async def get_by_id(self, order_id: str, tx: Optional[ITransaction] = None) -> Optional[Order]:
        """Return the order or None if it does not exist."""
        ...

    async def save(self, order: Order, tx: Optional[ITransaction] = None) -> None:
        """Create or replace the order document."""
        ...

    async def list_by_customer(self, customer_id: str) -> List[Order]:
        """Return all orders of a customer."""
        ...
