"""Ingredient value object and the raw shapes it is parsed from.

Historical plate documents carry ingredients in three shapes:

    "Tomato"                                                # bare string
    {"name": "Tomato", "obligatory": True}                  # current shape
    {"ingredients": ["Flour", "Eggs"], "obligatory": True}  # legacy nested

The raw shapes form a tagged union that is resolved once, at the system
boundary, by the ingredient normalizer. Everything past the boundary only
sees Ingredient.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple, Union

# Legacy documents spell the nested key both ways
NESTED_KEYS = ("ingredients", "ingridients")


@dataclass(frozen=True)
class Ingredient:
    """Value object for a dish ingredient.

    Attributes:
        name: Ingredient name, the identity used for deduplication
        obligatory: If True, the customer cannot remove it

    Examples:
        >>> Ingredient("Salt")
        Ingredient(name='Salt', obligatory=False)
    """

    name: str
    obligatory: bool = False


@dataclass(frozen=True)
class ObjectIngredient:
    """Raw ingredient already in {name, obligatory} shape."""

    ingredient: Ingredient

    def expand(self) -> List[Ingredient]:
        return [self.ingredient]


@dataclass(frozen=True)
class StringIngredient:
    """Raw ingredient given as a bare name."""

    name: str

    def expand(self) -> List[Ingredient]:
        return [Ingredient(name=self.name, obligatory=False)]


@dataclass(frozen=True)
class NestedLegacyIngredient:
    """Raw legacy group of names sharing one obligatory flag."""

    names: Tuple[str, ...]
    obligatory: bool

    def expand(self) -> List[Ingredient]:
        return [Ingredient(name=name, obligatory=self.obligatory) for name in self.names]


@dataclass(frozen=True)
class UnknownIngredient:
    """Anything else; coerced to its string form."""

    value: Any

    def expand(self) -> List[Ingredient]:
        return [Ingredient(name=str(self.value), obligatory=False)]


RawIngredient = Union[ObjectIngredient, StringIngredient, NestedLegacyIngredient, UnknownIngredient]


def classify_raw_ingredient(value: Any) -> RawIngredient:
    """Resolve one raw value into its tagged shape.

    An element with both name and obligatory is the current shape even if
    it also carries unrelated keys.
    """
    if isinstance(value, Ingredient):
        return ObjectIngredient(value)
    if isinstance(value, str):
        return StringIngredient(value)
    if isinstance(value, Mapping):
        if "name" in value and "obligatory" in value:
            return ObjectIngredient(Ingredient(name=value["name"], obligatory=value["obligatory"]))
        if "obligatory" in value:
            for key in NESTED_KEYS:
                if key in value:
                    names = value[key] or []
                    return NestedLegacyIngredient(
                        names=tuple(str(name) for name in names),
                        obligatory=bool(value["obligatory"]),
                    )
    return UnknownIngredient(value)
