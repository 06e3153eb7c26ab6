"""Money helpers.

Prices are decimal.Decimal inside the domain. Documents carry JSON numbers,
which are converted through str so that 5.49 stays exactly 5.49.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

from domain.shared.errors import ValidationFailedError

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Any, *, strict: bool = True) -> Decimal:
    """Convert a raw numeric value to Decimal.

    None maps to zero. With strict=False, anything unparseable also maps
    to zero instead of raising.

    Raises:
        ValidationFailedError: If value is not numeric and strict is True.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        if strict:
            raise ValidationFailedError(f"Invalid amount: {value!r}")
        return ZERO
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        if strict:
            raise ValidationFailedError(f"Invalid amount: {value!r}")
        return ZERO
    if not result.is_finite():
        if strict:
            raise ValidationFailedError(f"Invalid amount: {value!r}")
        return ZERO
    return result


def quantize_cents(value: Decimal) -> Decimal:
    """Round to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_sum(values: Iterable[Decimal]) -> Decimal:
    """Sum that starts from Decimal zero (plain sum() starts from int 0)."""
    return sum(values, ZERO)


def to_number(value: Decimal) -> float:
    """Convert to a JSON number for document storage."""
    return float(value)
