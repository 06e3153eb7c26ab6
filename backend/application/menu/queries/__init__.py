"""Queries for menu domain."""

from .customize_plate import CustomizePlateQuery, CustomizePlateQueryHandler, parse_selections
from .get_active_menu import GetActiveMenuQuery, GetActiveMenuQueryHandler
from .get_plate import GetPlateQuery, GetPlateQueryHandler
from .get_restaurant_menus import GetRestaurantMenusQuery, GetRestaurantMenusQueryHandler

__all__ = [
    "CustomizePlateQuery",
    "CustomizePlateQueryHandler",
    "GetActiveMenuQuery",
    "GetActiveMenuQueryHandler",
    "GetPlateQuery",
    "GetPlateQueryHandler",
    "GetRestaurantMenusQuery",
    "GetRestaurantMenusQueryHandler",
    "parse_selections",
]
