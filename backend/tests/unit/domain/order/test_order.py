"""Unit tests for the Order aggregate, order numbers and order pricing."""

import random
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from domain.cart.core.entities.cart import CartItem
from domain.menu.core.value_objects.selection import SelectedOptionDetail
from domain.order.core.entities.order import OrderItem
from domain.order.core.factories import generate_order_number, order_item_from_cart
from domain.order.core.value_objects.enums import OrderStatus, PaymentStatus
from domain.order.services import compute_order_amounts
from domain.shared.errors import InvalidStatusTransitionError, ValidationFailedError

NOW = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


class TestStatusMachine:
    """Test Order.change_status()."""

    def test_forward_step(self, make_order) -> None:
        order = make_order()

        previous = order.change_status(OrderStatus.CONFIRMED)

        assert previous == OrderStatus.PENDING
        assert order.status == OrderStatus.CONFIRMED

    def test_steps_may_be_skipped(self, make_order) -> None:
        order = make_order()
        order.change_status(OrderStatus.READY)
        assert order.status == OrderStatus.READY

    def test_backwards_rejected(self, make_order) -> None:
        order = make_order(status=OrderStatus.PREPARING)

        with pytest.raises(InvalidStatusTransitionError):
            order.change_status(OrderStatus.CONFIRMED)

        assert order.status == OrderStatus.PREPARING

    def test_same_status_rejected(self, make_order) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            make_order().change_status(OrderStatus.PENDING)

    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING])
    def test_cancel_before_ready(self, make_order, status) -> None:
        order = make_order(status=status)
        order.change_status(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    @pytest.mark.parametrize("status", [OrderStatus.READY, OrderStatus.OUT_FOR_DELIVERY])
    def test_cancel_once_ready_rejected(self, make_order, status) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            make_order(status=status).change_status(OrderStatus.CANCELLED)

    @pytest.mark.parametrize("status", [OrderStatus.DELIVERED, OrderStatus.CANCELLED])
    def test_terminal_statuses_are_final(self, make_order, status) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            make_order(status=status).change_status(OrderStatus.OUT_FOR_DELIVERY)

    def test_delivery_stamps_actual_time(self, make_order) -> None:
        order = make_order(status=OrderStatus.OUT_FOR_DELIVERY)

        order.change_status(OrderStatus.DELIVERED, at=NOW)

        assert order.actual_delivery_time == NOW

    def test_delivery_keeps_explicit_time(self, make_order) -> None:
        earlier = datetime(2030, 1, 7, 8, 30, tzinfo=timezone.utc)
        order = make_order(status=OrderStatus.OUT_FOR_DELIVERY, actual_delivery_time=earlier)

        order.change_status(OrderStatus.DELIVERED, at=NOW)

        assert order.actual_delivery_time == earlier


class TestPayment:
    """Test Order.change_payment_status()."""

    def test_paid_then_refunded(self, make_order) -> None:
        order = make_order()

        order.change_payment_status(PaymentStatus.PAID)
        order.change_payment_status(PaymentStatus.REFUNDED)

        assert order.payment_status == PaymentStatus.REFUNDED

    def test_refund_unpaid_rejected(self, make_order) -> None:
        with pytest.raises(InvalidStatusTransitionError):
            make_order().change_payment_status(PaymentStatus.REFUNDED)

    def test_same_payment_status_is_noop(self, make_order) -> None:
        order = make_order(payment_status=PaymentStatus.PAID)
        order.change_payment_status(PaymentStatus.PAID)
        assert order.payment_status == PaymentStatus.PAID


class TestInvariants:
    def test_order_needs_items(self, make_order) -> None:
        with pytest.raises(ValidationFailedError):
            make_order(items=[])

    def test_item_quantity_positive(self) -> None:
        with pytest.raises(ValidationFailedError):
            OrderItem(id="l1", plate_id="p", plate_name="P", price=Decimal("1"), quantity=0)


class TestOrderPricing:
    """Test compute_order_amounts()."""

    def test_fee_and_tax(self) -> None:
        items = [
            OrderItem(id="l1", plate_id="croissant", plate_name="Croissant", price=Decimal("5.49"), quantity=2),
        ]

        amounts = compute_order_amounts(items, "5.99", "0.08")

        assert amounts.subtotal == Decimal("10.98")
        assert amounts.delivery_fee == Decimal("5.99")
        assert amounts.tax == Decimal("0.88")
        assert amounts.total == Decimal("17.85")

    def test_tax_rounds_half_up(self) -> None:
        items = [OrderItem(id="l1", plate_id="p", plate_name="P", price=Decimal("0.0625"), quantity=100)]

        amounts = compute_order_amounts(items, 0, "0.1")

        assert amounts.subtotal == Decimal("6.25")
        assert amounts.tax == Decimal("0.63")


class TestOrderFactory:
    """Test generate_order_number() and order_item_from_cart()."""

    def test_order_number_format(self) -> None:
        number = generate_order_number(NOW, random.Random(7))

        prefix, millis, suffix = number.split("-")
        assert prefix == "ORD"
        assert millis == str(int(NOW.timestamp() * 1000))
        assert len(suffix) == 9
        assert suffix == suffix.lower() and suffix.isalnum()

    def test_seeded_numbers_repeat(self) -> None:
        assert generate_order_number(NOW, random.Random(7)) == generate_order_number(NOW, random.Random(7))

    def test_cart_line_copied_with_new_id(self) -> None:
        size = SelectedOptionDetail("size", "Size", "large", "Large", Decimal("1.5"))
        line = CartItem(
            id="cart-line",
            menu_id="menu-1",
            plate_id="croissant",
            plate_name="Croissant",
            price=Decimal("5.49"),
            quantity=2,
            restaurant_id="rest-1",
            restaurant_name="Trattoria",
            variant_id="v1",
            selected_options=[size],
            notes="warm",
        )

        item = order_item_from_cart(line, lambda: "order-line")

        assert item.id == "order-line"
        assert (item.plate_id, item.price, item.quantity, item.variant_id) == ("croissant", Decimal("5.49"), 2, "v1")
        assert item.selected_options == [size]
        assert item.notes == "warm"
        assert item.line_total == Decimal("10.98")
