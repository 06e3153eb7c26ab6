"""Factory helpers for Subscription aggregates."""

import random
import string
from datetime import datetime
from typing import Optional

BASE36_DIGITS = string.digits + string.ascii_uppercase


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_subscription_number(now: datetime, rng: Optional[random.Random] = None) -> str:
    """
    Human-facing subscription code.

    Format: "SUB-<epoch millis in base 36>-<6 random base 36 chars>",
    upper case.

    Example:
        >>> number = generate_subscription_number(datetime.now(timezone.utc))
        >>> number.startswith("SUB-"), len(number.split("-")[2])
        (True, 6)
    """
    rng = rng or random.Random()
    millis = int(now.timestamp() * 1000)
    suffix = "".join(rng.choice(BASE36_DIGITS) for _ in range(6))
    return f"SUB-{to_base36(millis)}-{suffix}"
