"""Value objects for the menu domain."""

from .ingredient import (
    Ingredient,
    NestedLegacyIngredient,
    ObjectIngredient,
    RawIngredient,
    StringIngredient,
    UnknownIngredient,
    classify_raw_ingredient,
)
from .section import MenuOption, MenuSection
from .selection import (
    OptionSelection,
    SelectedOptionDetail,
    build_variant_key,
    parse_selected_option,
)
from .variant import DEFAULT_VARIANT_KEY, DEFAULT_VARIANT_NAME, PlateVariant

__all__ = [
    "Ingredient",
    "ObjectIngredient",
    "StringIngredient",
    "NestedLegacyIngredient",
    "UnknownIngredient",
    "RawIngredient",
    "classify_raw_ingredient",
    "MenuOption",
    "MenuSection",
    "OptionSelection",
    "SelectedOptionDetail",
    "build_variant_key",
    "parse_selected_option",
    "PlateVariant",
    "DEFAULT_VARIANT_KEY",
    "DEFAULT_VARIANT_NAME",
]
