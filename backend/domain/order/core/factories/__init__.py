"""Factories for order domain."""

from .order_factory import generate_order_number, order_item_from_cart

__all__ = ["generate_order_number", "order_item_from_cart"]
