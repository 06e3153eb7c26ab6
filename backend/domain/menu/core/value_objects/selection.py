"""Option selections and the canonical variant key.

The variant key is the join key between a customer's selections and the
plate's precomputed variants, so it must not depend on selection order.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping

from domain.menu.core.value_objects.variant import DEFAULT_VARIANT_KEY
from domain.shared.errors import ValidationFailedError
from domain.shared.money import ZERO, to_decimal


@dataclass(frozen=True)
class OptionSelection:
    """A (section, option) pair chosen by the customer."""

    section_id: str
    option_id: str

    @property
    def key_part(self) -> str:
        return f"{self.section_id}:{self.option_id}"


@dataclass(frozen=True)
class SelectedOptionDetail:
    """A resolved selection with the names and cost it carried at order time."""

    section_id: str
    section_name: str
    option_id: str
    option_name: str
    additional_cost: Decimal = ZERO


def build_variant_key(selections: Iterable[OptionSelection]) -> str:
    """Canonical key of a selection set.

    Pairs are rendered as "sectionId:optionId", sorted lexicographically
    and joined with "|". The empty set is "default".

    Examples:
        >>> build_variant_key([OptionSelection("s2", "o1"), OptionSelection("s1", "o9")])
        's1:o9|s2:o1'
        >>> build_variant_key([])
        'default'
    """
    parts = sorted(selection.key_part for selection in selections)
    if not parts:
        return DEFAULT_VARIANT_KEY
    return "|".join(parts)


def parse_selected_option(raw: Mapping[str, Any]) -> SelectedOptionDetail:
    """Build a SelectedOptionDetail from its camelCase payload.

    Raises:
        ValidationFailedError: If raw is not a mapping
    """
    if not isinstance(raw, Mapping):
        raise ValidationFailedError(f"Malformed selected option: {raw!r}")
    return SelectedOptionDetail(
        section_id=str(raw.get("sectionId", "")),
        section_name=str(raw.get("sectionName", "")),
        option_id=str(raw.get("optionId", "")),
        option_name=str(raw.get("optionName", "")),
        additional_cost=to_decimal(raw.get("additionalCost"), strict=False),
    )
