"""Domain services for order pricing."""

from .order_pricing import OrderAmounts, compute_order_amounts

__all__ = ["OrderAmounts", "compute_order_amounts"]
