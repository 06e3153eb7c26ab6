"""Ingredient normalization.

Turns the heterogeneous ingredient payloads found in plate documents into
a flat list of Ingredient, and merges ingredient lists by name.
"""

from typing import Any, Dict, Iterable, List, Optional

from domain.menu.core.value_objects.ingredient import Ingredient, classify_raw_ingredient


def normalize_ingredients(raw: Optional[Iterable[Any]]) -> List[Ingredient]:
    """
    Canonicalize raw ingredient values.

    Accepted shapes:
    - {"name": ..., "obligatory": ...} → passed through unchanged
    - "Tomato" → Ingredient("Tomato", obligatory=False)
    - {"ingredients" | "ingridients": [...], "obligatory": ...} → one
      Ingredient per name, sharing the flag, flattened in place
    - anything else → Ingredient(str(value), obligatory=False)

    Pure and idempotent: normalizing an already normalized list returns an
    equal list.

    Args:
        raw: Raw values, None is treated as empty

    Returns:
        Flat list of Ingredient in input order (no deduplication)

    Example:
        >>> normalize_ingredients(["Flour", {"ingredients": ["Egg"], "obligatory": True}])
        [Ingredient(name='Flour', obligatory=False), Ingredient(name='Egg', obligatory=True)]
    """
    if raw is None:
        return []

    result: List[Ingredient] = []
    for value in raw:
        result.extend(classify_raw_ingredient(value).expand())
    return result


def merge_ingredients(*ingredient_lists: Iterable[Ingredient]) -> List[Ingredient]:
    """
    Merge ingredient lists, deduplicating by name.

    The first occurrence of a name wins, so the obligatory flag of the
    earliest added entry is kept.

    Example:
        >>> merge_ingredients([Ingredient("Salt", False)], [Ingredient("Salt", True)])
        [Ingredient(name='Salt', obligatory=False)]
    """
    merged: Dict[str, Ingredient] = {}
    for ingredients in ingredient_lists:
        for ingredient in ingredients:
            if ingredient.name not in merged:
                merged[ingredient.name] = ingredient
    return list(merged.values())
