"""Queries for order domain."""

from .get_orders import (
    GetCustomerOrdersQuery,
    GetCustomerOrdersQueryHandler,
    GetOrderQuery,
    GetOrderQueryHandler,
)

__all__ = [
    "GetOrderQuery",
    "GetOrderQueryHandler",
    "GetCustomerOrdersQuery",
    "GetCustomerOrdersQueryHandler",
]
