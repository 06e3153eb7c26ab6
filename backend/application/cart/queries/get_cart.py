"""Get cart query - the customer's active cart."""

from dataclasses import dataclass
from typing import Optional

from application.shared.result import OperationResult, execute
from domain.cart.core.entities.cart import ShoppingCart
from domain.shared.ports.cart_repository import ICartRepository


@dataclass(frozen=True)
class GetCartQuery:
    customer_id: str


class GetCartQueryHandler:
    """Handler for GetCartQuery."""

    def __init__(self, repository: ICartRepository):
        self._repository = repository

    async def handle(self, query: GetCartQuery) -> OperationResult[Optional[ShoppingCart]]:
        """Succeeds with None when the customer has no active cart."""
        return await execute("get_cart", lambda: self._repository.find_active(query.customer_id))
