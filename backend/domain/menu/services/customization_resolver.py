"""Customization resolution.

Prices a customer's option selections on a plate and matches them against
the plate's precomputed variants, falling back to a computed ingredient
list when the variant cache has no entry for the combination.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from domain.menu.core.entities.plate import Plate
from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.section import MenuOption, MenuSection
from domain.menu.core.value_objects.selection import (
    OptionSelection,
    SelectedOptionDetail,
    build_variant_key,
)
from domain.menu.core.value_objects.variant import PlateVariant
from domain.menu.services.ingredient_normalizer import merge_ingredients
from domain.shared.errors import StaleVariantCacheError, ValidationFailedError
from domain.shared.money import money_sum, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomizationResult:
    """
    Outcome of resolving selections on a plate.

    Exactly one of matched_variant_id and custom_ingredients is set: when a
    variant matched, the caller uses that variant's ingredient list.
    """

    final_price: Decimal
    selected_options: Tuple[SelectedOptionDetail, ...]
    matched_variant_id: Optional[str] = None
    custom_ingredients: Optional[Tuple[Ingredient, ...]] = None

    @property
    def matched(self) -> bool:
        return self.matched_variant_id is not None


def resolve_selections(
    plate: Plate,
    selections: Iterable[OptionSelection],
) -> List[Tuple[MenuSection, MenuOption]]:
    """
    Resolve selections against the plate's sections.

    Pairs pointing at unknown sections or options are dropped and repeated
    pairs are kept once, in first-seen order.
    """
    resolved: List[Tuple[MenuSection, MenuOption]] = []
    seen = set()

    for selection in selections:
        if selection.key_part in seen:
            continue
        section = plate.find_section(selection.section_id)
        option = section.find_option(selection.option_id) if section else None
        if section is None or option is None:
            logger.warning(
                "Ignoring stale selection",
                extra={
                    "plate_id": plate.id,
                    "section_id": selection.section_id,
                    "option_id": selection.option_id,
                },
            )
            continue
        seen.add(selection.key_part)
        resolved.append((section, option))

    return resolved


def lookup_variant(plate: Plate, variant_key: str) -> PlateVariant:
    """
    Return the cached variant for a key.

    Raises:
        StaleVariantCacheError: If the plate has no variant with that key
    """
    variant = plate.find_variant(variant_key)
    if variant is None:
        raise StaleVariantCacheError(f"Plate {plate.id} has no variant for key {variant_key!r}")
    return variant


def resolve_customization(
    plate: Plate,
    selections: Iterable[OptionSelection],
) -> CustomizationResult:
    """
    Price selections and match them to a precomputed variant.

    final_price is always base_price plus the additional cost of each
    resolved option, whether or not a variant matches. Pure: identical
    inputs give identical results.

    Args:
        plate: Plate with its sections and variant cache
        selections: (section_id, option_id) pairs chosen by the customer

    Returns:
        CustomizationResult with matched_variant_id, or custom_ingredients
        computed from base ingredients plus ingredient-dependent options

    Example:
        >>> result = resolve_customization(croissant, [OptionSelection("size", "large")])
        >>> result.final_price
        Decimal('5.49')
    """
    resolved = resolve_selections(plate, selections)

    details = tuple(
        SelectedOptionDetail(
            section_id=section.id,
            section_name=section.name,
            option_id=option.id,
            option_name=option.name,
            additional_cost=to_decimal(option.additional_cost, strict=False),
        )
        for section, option in resolved
    )
    final_price = plate.base_price + money_sum(detail.additional_cost for detail in details)
    variant_key = build_variant_key(
        OptionSelection(section.id, option.id) for section, option in resolved
    )

    try:
        variant = lookup_variant(plate, variant_key)
    except StaleVariantCacheError:
        logger.info(
            "Variant cache miss, computing custom ingredients",
            extra={"plate_id": plate.id, "variant_key": variant_key},
        )
        custom_ingredients = merge_ingredients(
            plate.base_ingredients,
            *(option.ingredients for section, option in resolved if section.ingredient_dependent),
        )
        return CustomizationResult(
            final_price=final_price,
            selected_options=details,
            custom_ingredients=tuple(custom_ingredients),
        )

    return CustomizationResult(
        final_price=final_price,
        selected_options=details,
        matched_variant_id=variant.id,
    )


def missing_required_sections(
    plate: Plate,
    selections: Sequence[OptionSelection],
) -> List[MenuSection]:
    """
    List required sections (with options) that have no resolved selection.

    Sections without options cannot be satisfied and are never reported.
    """
    chosen = {section.id for section, _ in resolve_selections(plate, selections)}
    return [
        section
        for section in plate.sections
        if section.required and section.options and section.id not in chosen
    ]


def overselected_sections(
    plate: Plate,
    selections: Sequence[OptionSelection],
) -> List[MenuSection]:
    """List single-choice sections with more than one resolved option."""
    counts: Dict[str, int] = {}
    for section, _ in resolve_selections(plate, selections):
        counts[section.id] = counts.get(section.id, 0) + 1
    return [
        section
        for section in plate.sections
        if not section.multiple and counts.get(section.id, 0) > 1
    ]


def validate_selections(plate: Plate, selections: Sequence[OptionSelection]) -> None:
    """
    Check that every required section has a choice and no single-choice
    section has several.

    Raises:
        ValidationFailedError: Naming the offending sections
    """
    missing = missing_required_sections(plate, selections)
    if missing:
        names = ", ".join(section.name for section in missing)
        raise ValidationFailedError(f"Please select an option for: {names}")

    overselected = overselected_sections(plate, selections)
    if overselected:
        names = ", ".join(section.name for section in overselected)
        raise ValidationFailedError(f"Please choose only one option for: {names}")
