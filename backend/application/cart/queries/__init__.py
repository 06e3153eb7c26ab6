"""Queries for cart domain."""

from .get_cart import GetCartQuery, GetCartQueryHandler

__all__ = ["GetCartQuery", "GetCartQueryHandler"]
