"""Domain events for menu domain."""

from .menu_deleted import MenuDeleted
from .plate_deleted import PlateDeleted
from .plate_variants_regenerated import PlateVariantsRegenerated

__all__ = [
    "MenuDeleted",
    "PlateDeleted",
    "PlateVariantsRegenerated",
]
