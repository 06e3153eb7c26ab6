"""Update menu command and handler."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from application.menu.dtos import MenuUpdateInput
from application.shared.result import OperationResult, execute
from domain.menu.core.entities.menu import Menu
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateMenuCommand:
    """
    Command: Update menu name, description or active flag.

    Activating a menu deactivates the restaurant's other active menus, so
    a restaurant has at most one active menu.

    Attributes:
        menu_id: Menu to update
        name: New name (None keeps the current one)
        description: New description (None keeps the current one)
        active: New active flag (None keeps the current one)
    """

    menu_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    active: Optional[bool] = None


class UpdateMenuCommandHandler:
    """Handler for UpdateMenuCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: IMenuRepository,
    ):
        self._store = store
        self._repository = repository

    async def handle(self, command: UpdateMenuCommand) -> OperationResult[Menu]:
        return await execute("update_menu", lambda: self._update(command))

    async def _update(self, command: UpdateMenuCommand) -> Menu:
        payload: Dict[str, Any] = {
            "name": command.name,
            "description": command.description,
            "active": command.active,
        }
        data = MenuUpdateInput.model_validate(payload)

        # Candidates are listed outside the transaction and re-read inside it
        siblings = []
        if data.active:
            current = await self._repository.get_by_id(command.menu_id)
            if current is not None:
                siblings = [
                    menu.id
                    for menu in await self._repository.list_by_restaurant(current.restaurant_id)
                    if menu.id != command.menu_id and menu.active
                ]

        async def update(tx: ITransaction) -> Menu:
            menu = await self._repository.get_by_id(command.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {command.menu_id} not found")

            if data.name is not None:
                menu.name = data.name
            if data.description is not None:
                menu.description = data.description
            if data.active is not None:
                menu.active = data.active
            menu.touch()

            for sibling_id in siblings:
                sibling = await self._repository.get_by_id(sibling_id, tx)
                if sibling is None or not sibling.active:
                    continue
                sibling.active = False
                sibling.touch()
                await self._repository.save(sibling, tx)

            await self._repository.save(menu, tx)
            return menu

        menu = await self._store.run_transaction(update)

        logger.info(
            "Menu updated",
            extra={
                "menu_id": menu.id,
                "active": menu.active,
                "deactivated_menus": len(siblings) if data.active else 0,
            },
        )
        return menu
