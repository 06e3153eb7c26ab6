"""Domain services for menu customization and pricing."""

from .ingredient_normalizer import merge_ingredients, normalize_ingredients
from .variant_generator import generate_variants
from .customization_resolver import (
    CustomizationResult,
    missing_required_sections,
    overselected_sections,
    resolve_customization,
    validate_selections,
)

__all__ = [
    "normalize_ingredients",
    "merge_ingredients",
    "generate_variants",
    "CustomizationResult",
    "resolve_customization",
    "missing_required_sections",
    "overselected_sections",
    "validate_selections",
]
