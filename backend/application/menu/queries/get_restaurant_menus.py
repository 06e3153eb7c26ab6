"""Restaurant menus query - every menu of a restaurant, active or not."""

from dataclasses import dataclass
from typing import List

from application.shared.result import OperationResult, execute
from domain.menu.core.entities.menu import Menu
from domain.shared.ports.menu_repository import IMenuRepository


@dataclass(frozen=True)
class GetRestaurantMenusQuery:
    restaurant_id: str


class GetRestaurantMenusQueryHandler:
    """Handler for GetRestaurantMenusQuery (newest first; empty list if none)."""

    def __init__(self, repository: IMenuRepository):
        self._repository = repository

    async def handle(self, query: GetRestaurantMenusQuery) -> OperationResult[List[Menu]]:
        return await execute("get_restaurant_menus", lambda: self._list(query))

    async def _list(self, query: GetRestaurantMenusQuery) -> List[Menu]:
        menus = await self._repository.list_by_restaurant(query.restaurant_id)
        return sorted(menus, key=lambda m: m.created_at, reverse=True)
