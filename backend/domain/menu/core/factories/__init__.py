"""Factories for menu domain entities."""

from .plate_factory import PlateFactory

__all__ = ["PlateFactory"]
