"""Shopping cart repository port (interface)."""

from typing import Optional, Protocol

from domain.cart.core.entities.cart import ShoppingCart
from domain.shared.ports.document_store import ITransaction


class ICartRepository(Protocol):
    """Interface for shopping cart persistence operations."""

    async def get_by_id(self, cart_id: str, tx: Optional[ITransaction] = None) -> Optional[ShoppingCart]:
        """Return the cart or None if it does not exist."""
        ...

    async def find_active(
        self,
        customer_id: str,
        tx: Optional[ITransaction] = None,
    ) -> Optional[ShoppingCart]:
        """
        Return the customer's active cart, or None.

        With a transaction, both the customer's active-cart pointer and the
        cart document are read through it, so a concurrent change to either
        (including a concurrent first cart) aborts the commit.
        """
        ...

    async def save(self, cart: ShoppingCart, tx: Optional[ITransaction] = None) -> None:
        """Create or replace the cart document and keep the active-cart pointer in step."""
        ...
