"""Menu repository port (interface).

Defines contract for menu persistence. Every method accepts an optional
transaction: when given, reads are version-checked and writes are
buffered until the transaction commits.
"""

from typing import List, Optional, Protocol

from domain.menu.core.entities.menu import Menu
from domain.shared.ports.document_store import ITransaction


class IMenuRepository(Protocol):
    """
    Interface for menu persistence operations.

    Example usage (application layer):
        >>> async def rename(tx: ITransaction) -> Menu:
        ...     menu = await repository.get_by_id(menu_id, tx)
        ...     menu.name = "Dinner"
        ...     await repository.save(menu, tx)
        ...     return menu
        ...
        >>> menu = await store.run_transaction(rename)
    """

    async def get_by_id(self, menu_id: str, tx: Optional[ITransaction] = None) -> Optional[Menu]:
        """Return the menu, plates included, or None if it does not exist."""
        ...

    async def save(self, menu: Menu, tx: Optional[ITransaction] = None) -> None:
        """Create or replace the menu document (plates and variants included)."""
        ...

    async def list_by_restaurant(self, restaurant_id: str) -> List[Menu]:
        """Return all menus of a restaurant."""
        ...

    async def restaurant_exists(self, restaurant_id: str, tx: Optional[ITransaction] = None) -> bool:
        """Check that the restaurant document exists."""
        ...

    async def delete(self, menu_id: str, tx: Optional[ITransaction] = None) -> None:
        """Remove the menu document, plates included."""
        ...
