"""Active menu query - the menu a restaurant currently serves."""

from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.menu.core.entities.menu import Menu
from domain.shared.errors import NotFoundError
from domain.shared.ports.menu_repository import IMenuRepository


@dataclass(frozen=True)
class GetActiveMenuQuery:
    restaurant_id: str


class GetActiveMenuQueryHandler:
    """Handler for GetActiveMenuQuery."""

    def __init__(self, repository: IMenuRepository):
        self._repository = repository

    async def handle(self, query: GetActiveMenuQuery) -> OperationResult[Menu]:
        """
        Returns:
            OperationResult with the first active menu, or NOT_FOUND if the
            restaurant has none
        """
        return await execute("get_active_menu", lambda: self._get(query))

    async def _get(self, query: GetActiveMenuQuery) -> Menu:
        for menu in await self._repository.list_by_restaurant(query.restaurant_id):
            if menu.active:
                return menu
        raise NotFoundError(f"No active menu found for restaurant {query.restaurant_id}")
