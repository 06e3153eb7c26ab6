"""Core entities for menu domain."""

from .plate import Plate
from .menu import Menu

__all__ = ["Plate", "Menu"]
