"""Domain events for cart domain."""

from .cart_updated import CartUpdated

__all__ = ["CartUpdated"]
