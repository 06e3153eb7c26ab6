"""Delete menu command and handler."""

import logging
from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.menu.core.events import MenuDeleted
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMenuCommand:
    """
    Command: Remove a menu with all its plates.

    Carts, orders and subscriptions keep their own copies of plate names
    and prices.
    """

    menu_id: str


class DeleteMenuCommandHandler:
    """Handler for DeleteMenuCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: IMenuRepository,
        event_bus: IEventBus,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: DeleteMenuCommand) -> OperationResult[None]:
        return await execute("delete_menu", lambda: self._delete(command))

    async def _delete(self, command: DeleteMenuCommand) -> None:
        async def delete(tx: ITransaction) -> str:
            menu = await self._repository.get_by_id(command.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {command.menu_id} not found")
            await self._repository.delete(menu.id, tx)
            return menu.restaurant_id

        restaurant_id = await self._store.run_transaction(delete)

        logger.info("Menu deleted", extra={"menu_id": command.menu_id, "restaurant_id": restaurant_id})
        await self._event_bus.publish(MenuDeleted.create(menu_id=command.menu_id, restaurant_id=restaurant_id))
