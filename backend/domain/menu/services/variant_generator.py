"""Variant generation for customizable plates.

Enumerates the option combinations reachable from a plate's sections and
materializes each one as a priced, ingredient-resolved PlateVariant.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Tuple

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.section import MenuOption, MenuSection
from domain.menu.core.value_objects.selection import OptionSelection, build_variant_key
from domain.menu.core.value_objects.variant import DEFAULT_VARIANT_NAME, PlateVariant
from domain.menu.services.ingredient_normalizer import merge_ingredients
from domain.shared.errors import ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.money import money_sum, to_decimal

logger = logging.getLogger(__name__)

# A partial combination: (section, option) pairs in selection order
Combination = Tuple[Tuple[MenuSection, MenuOption], ...]


def expand_combinations(sections: Sequence[MenuSection]) -> List[Combination]:
    """
    Enumerate option combinations section by section.

    Branching per section, in array order:
    - no options: skipped
    - multiple: for every partial combination keep it unchanged and
      add one branch per option (single option per section, not the
      power set)
    - required and single: one branch per option, no "none" branch
    - optional and single: keep unchanged, plus one branch per option

    Returns:
        Combinations in generation order, the empty one included when reachable
    """
    combinations: List[Combination] = [()]

    for section in sections:
        if not section.options:
            continue

        next_combinations: List[Combination] = []
        for combination in combinations:
            if section.multiple:
                for option in section.options:
                    next_combinations.append(combination + ((section, option),))
                next_combinations.append(combination)
            elif section.required:
                for option in section.options:
                    next_combinations.append(combination + ((section, option),))
            else:
                next_combinations.append(combination)
                for option in section.options:
                    next_combinations.append(combination + ((section, option),))
        combinations = next_combinations

    return combinations


def build_variant(
    combination: Combination,
    base_price: Decimal,
    base_ingredients: Iterable[Ingredient],
    variant_id: str,
) -> PlateVariant:
    """Materialize one combination as a PlateVariant."""
    selections = [OptionSelection(section.id, option.id) for section, option in combination]
    price = base_price + money_sum(
        to_decimal(option.additional_cost, strict=False) for _, option in combination
    )
    ingredients = merge_ingredients(
        base_ingredients,
        *(option.ingredients for section, option in combination if section.ingredient_dependent),
    )
    names = [option.name for _, option in combination]

    return PlateVariant(
        id=variant_id,
        variant_key=build_variant_key(selections),
        variant_name=", ".join(names) if names else DEFAULT_VARIANT_NAME,
        price=price,
        ingredients=tuple(ingredients),
        active=True,
    )


def generate_variants(
    base_price: Decimal,
    base_ingredients: Iterable[Ingredient],
    sections: Sequence[MenuSection],
    id_factory: IdFactory = new_id,
) -> List[PlateVariant]:
    """
    Generate the variant cache of a plate.

    Variants are unique by variant_key (first generated wins). A plate
    whose sections carry no options gets exactly one "Standard" variant
    equal to the base plate.

    Args:
        base_price: Plate base price (>= 0)
        base_ingredients: Normalized base ingredients
        sections: Customization sections in display order
        id_factory: Mints variant ids

    Returns:
        List of PlateVariant in generation order

    Raises:
        ValidationFailedError: If base_price is negative

    Example:
        >>> size = MenuSection("size", "Size", required=True, options=(
        ...     MenuOption("reg", "Regular"), MenuOption("lg", "Large", Decimal("1.50"))))
        >>> [v.variant_name for v in generate_variants(Decimal("3.99"), [], [size])]
        ['Regular', 'Large']
    """
    if base_price < 0:
        raise ValidationFailedError(f"Base price cannot be negative, got {base_price}")

    base = list(base_ingredients)
    variants: Dict[str, PlateVariant] = {}

    for combination in expand_combinations(sections):
        variant = build_variant(combination, base_price, base, id_factory())
        if variant.variant_key not in variants:
            variants[variant.variant_key] = variant

    logger.debug(
        "Variants generated",
        extra={
            "sections": len(sections),
            "variants": len(variants),
        },
    )

    return list(variants.values())
