"""Order amounts.

Formula:
    subtotal     = Σ price × quantity
    delivery_fee = flat fee per order
    tax          = subtotal × tax_rate
    total        = subtotal + delivery_fee + tax

Each amount is rounded to cents (half up); total is the sum of the
rounded amounts, the same rule the subscription billing follows.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from domain.order.core.entities.order import OrderItem
from domain.shared.money import money_sum, quantize_cents, to_decimal


@dataclass(frozen=True)
class OrderAmounts:
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal


def compute_order_amounts(items: Iterable[OrderItem], delivery_fee: Any, tax_rate: Any) -> OrderAmounts:
    """
    Example:
        >>> compute_order_amounts(items_worth_10_98, "5.99", "0.08")
        OrderAmounts(subtotal=Decimal('10.98'), delivery_fee=Decimal('5.99'),
                     tax=Decimal('0.88'), total=Decimal('17.85'))
    """
    subtotal = quantize_cents(money_sum(item.line_total for item in items))
    fee = quantize_cents(to_decimal(delivery_fee))
    tax = quantize_cents(subtotal * to_decimal(tax_rate))
    return OrderAmounts(subtotal=subtotal, delivery_fee=fee, tax=tax, total=subtotal + fee + tax)
