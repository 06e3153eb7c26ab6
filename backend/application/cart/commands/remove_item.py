"""Remove cart item command and handler."""

from dataclasses import dataclass

from application.cart.commands.base import CartMutationHandler
from application.shared.result import OperationResult, execute
from domain.cart.core.entities.cart import ShoppingCart


@dataclass(frozen=True)
class RemoveItemCommand:
    customer_id: str
    item_id: str


class RemoveItemCommandHandler(CartMutationHandler):
    """Handler for RemoveItemCommand. Removing the last line unbinds the restaurant."""

    async def handle(self, command: RemoveItemCommand) -> OperationResult[ShoppingCart]:
        return await execute(
            "remove_cart_item",
            lambda: self._mutate(
                command.customer_id,
                "remove_item",
                lambda cart: cart.remove_item(command.item_id),
            ),
        )
