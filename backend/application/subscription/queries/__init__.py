"""Queries for subscription domain."""

from .get_delivery_history import GetDeliveryHistoryQuery, GetDeliveryHistoryQueryHandler
from .get_subscriptions import (
    GetCustomerSubscriptionsQuery,
    GetCustomerSubscriptionsQueryHandler,
    GetRestaurantSubscriptionsQuery,
    GetRestaurantSubscriptionsQueryHandler,
    GetSubscriptionQuery,
    GetSubscriptionQueryHandler,
)
from .get_summary import GetSubscriptionSummaryQuery, GetSubscriptionSummaryQueryHandler

__all__ = [
    "GetCustomerSubscriptionsQuery",
    "GetCustomerSubscriptionsQueryHandler",
    "GetDeliveryHistoryQuery",
    "GetDeliveryHistoryQueryHandler",
    "GetRestaurantSubscriptionsQuery",
    "GetRestaurantSubscriptionsQueryHandler",
    "GetSubscriptionQuery",
    "GetSubscriptionQueryHandler",
    "GetSubscriptionSummaryQuery",
    "GetSubscriptionSummaryQueryHandler",
]
