"""Clear cart command and handler."""

from dataclasses import dataclass

from application.cart.commands.base import CartMutationHandler
from application.shared.result import OperationResult, execute
from domain.cart.core.entities.cart import ShoppingCart


@dataclass(frozen=True)
class ClearCartCommand:
    customer_id: str


class ClearCartCommandHandler(CartMutationHandler):
    """Handler for ClearCartCommand."""

    async def handle(self, command: ClearCartCommand) -> OperationResult[ShoppingCart]:
        return await execute(
            "clear_cart",
            lambda: self._mutate(command.customer_id, "clear", lambda cart: cart.clear()),
        )
