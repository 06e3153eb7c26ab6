"""Update cart item quantity command and handler."""

from dataclasses import dataclass

from application.cart.commands.base import CartMutationHandler
from application.shared.result import OperationResult, execute
from domain.cart.core.entities.cart import ShoppingCart


@dataclass(frozen=True)
class UpdateItemQuantityCommand:
    """
    Command: Set the quantity of a cart line.

    A quantity of zero or less removes the line.
    """

    customer_id: str
    item_id: str
    quantity: int


class UpdateItemQuantityCommandHandler(CartMutationHandler):
    """Handler for UpdateItemQuantityCommand."""

    async def handle(self, command: UpdateItemQuantityCommand) -> OperationResult[ShoppingCart]:
        return await execute(
            "update_cart_item_quantity",
            lambda: self._mutate(
                command.customer_id,
                "update_quantity",
                lambda cart: cart.update_item_quantity(command.item_id, command.quantity),
            ),
        )
