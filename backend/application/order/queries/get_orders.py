"""Order read queries."""

from dataclasses import dataclass
from typing import List

from application.shared.result import OperationResult, execute
from domain.order.core.entities.order import Order
from domain.shared.errors import NotFoundError
from domain.shared.ports.order_repository import IOrderRepository

DEFAULT_HISTORY_LIMIT = 20


@dataclass(frozen=True)
class GetOrderQuery:
    order_id: str


@dataclass(frozen=True)
class GetCustomerOrdersQuery:
    customer_id: str
    limit: int = DEFAULT_HISTORY_LIMIT


class GetOrderQueryHandler:
    """Handler for GetOrderQuery."""

    def __init__(self, repository: IOrderRepository):
        self._repository = repository

    async def handle(self, query: GetOrderQuery) -> OperationResult[Order]:
        return await execute("get_order", lambda: self._get(query))

    async def _get(self, query: GetOrderQuery) -> Order:
        order = await self._repository.get_by_id(query.order_id)
        if order is None:
            raise NotFoundError(f"Order {query.order_id} not found")
        return order


class GetCustomerOrdersQueryHandler:
    """Handler for GetCustomerOrdersQuery (newest first, at most limit orders)."""

    def __init__(self, repository: IOrderRepository):
        self._repository = repository

    async def handle(self, query: GetCustomerOrdersQuery) -> OperationResult[List[Order]]:
        return await execute("get_customer_orders", lambda: self._list(query))

    async def _list(self, query: GetCustomerOrdersQuery) -> List[Order]:
        orders = await self._repository.list_by_customer(query.customer_id)
        return sorted(orders, key=lambda o: o.created_at, reverse=True)[: query.limit]
