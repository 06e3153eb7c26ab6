"""Core entities for cart domain."""

from .cart import CartItem, ShoppingCart

__all__ = ["CartItem", "ShoppingCart"]
