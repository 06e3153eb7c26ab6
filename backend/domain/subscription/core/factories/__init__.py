"""Factories for subscription domain entities."""

from .plate_item_factory import PlateItemFactory
from .subscription_factory import generate_subscription_number

__all__ = ["PlateItemFactory", "generate_subscription_number"]
