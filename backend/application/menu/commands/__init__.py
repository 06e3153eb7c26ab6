"""Commands for menu domain."""

from .add_plate import AddPlateCommand, AddPlateCommandHandler
from .create_menu import CreateMenuCommand, CreateMenuCommandHandler
from .delete_menu import DeleteMenuCommand, DeleteMenuCommandHandler
from .delete_plate import DeletePlateCommand, DeletePlateCommandHandler
from .regenerate_variants import (
    RegenerateVariantsCommand,
    RegenerateVariantsCommandHandler,
    RegenerationReport,
)
from .update_menu import UpdateMenuCommand, UpdateMenuCommandHandler
from .update_plate import UpdatePlateCommand, UpdatePlateCommandHandler

__all__ = [
    # Menu commands
    "CreateMenuCommand",
    "CreateMenuCommandHandler",
    "UpdateMenuCommand",
    "UpdateMenuCommandHandler",
    "DeleteMenuCommand",
    "DeleteMenuCommandHandler",
    # Plate commands
    "AddPlateCommand",
    "AddPlateCommandHandler",
    "UpdatePlateCommand",
    "UpdatePlateCommandHandler",
    "DeletePlateCommand",
    "DeletePlateCommandHandler",
    # Maintenance
    "RegenerateVariantsCommand",
    "RegenerateVariantsCommandHandler",
    "RegenerationReport",
]
