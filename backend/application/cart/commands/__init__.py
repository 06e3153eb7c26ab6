"""Commands for cart domain."""

from .add_to_cart import AddToCartCommand, AddToCartCommandHandler
from .clear_cart import ClearCartCommand, ClearCartCommandHandler
from .remove_item import RemoveItemCommand, RemoveItemCommandHandler
from .update_item_quantity import UpdateItemQuantityCommand, UpdateItemQuantityCommandHandler

__all__ = [
    "AddToCartCommand",
    "AddToCartCommandHandler",
    "ClearCartCommand",
    "ClearCartCommandHandler",
    "RemoveItemCommand",
    "RemoveItemCommandHandler",
    "UpdateItemQuantityCommand",
    "UpdateItemQuantityCommandHandler",
]
