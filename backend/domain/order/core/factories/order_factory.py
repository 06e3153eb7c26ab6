"""Factory helpers for Order aggregates."""

import random
import string
from datetime import datetime
from typing import Optional

from domain.cart.core.entities.cart import CartItem
from domain.order.core.entities.order import OrderItem
from domain.shared.identifiers import IdFactory, new_id

ORDER_SUFFIX_DIGITS = string.digits + string.ascii_lowercase


def generate_order_number(now: datetime, rng: Optional[random.Random] = None) -> str:
    """
    Human-facing order code.

    Format: "ORD-<epoch millis>-<9 random lower-case base 36 chars>".

    Example:
        >>> number = generate_order_number(datetime.now(timezone.utc))
        >>> number.startswith("ORD-"), len(number.split("-")[2])
        (True, 9)
    """
    rng = rng or random.Random()
    millis = int(now.timestamp() * 1000)
    suffix = "".join(rng.choice(ORDER_SUFFIX_DIGITS) for _ in range(9))
    return f"ORD-{millis}-{suffix}"


def order_item_from_cart(item: CartItem, id_factory: IdFactory = new_id) -> OrderItem:
    """Snapshot a cart line; the order item gets its own id."""
    return OrderItem(
        id=id_factory(),
        plate_id=item.plate_id,
        plate_name=item.plate_name,
        price=item.price,
        quantity=item.quantity,
        variant_id=item.variant_id,
        custom_ingredients=list(item.custom_ingredients),
        selected_options=list(item.selected_options),
        image_url=item.image_url,
        notes=item.notes,
    )
