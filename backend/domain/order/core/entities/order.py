"""Order aggregate root and OrderItem entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from domain.menu.core.value_objects.ingredient import Ingredient
from domain.menu.core.value_objects.selection import SelectedOptionDetail
from domain.order.core.value_objects.enums import OrderStatus, PaymentStatus
from domain.shared.errors import InvalidStatusTransitionError, ValidationFailedError
from domain.subscription.core.value_objects.delivery_address import DeliveryAddress

# Forward moves only; a restaurant may skip intermediate steps
_FULFILMENT_SEQUENCE = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)

_CANCELLABLE = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING)

_PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: (PaymentStatus.PAID,),
    PaymentStatus.PAID: (PaymentStatus.REFUNDED,),
    PaymentStatus.REFUNDED: (),
}


@dataclass
class OrderItem:
    """
    Entity: One ordered line, copied from the cart at checkout.

    price is the unit price; prices never change after the order is placed.
    """

    id: str
    plate_id: str
    plate_name: str
    price: Decimal
    quantity: int
    variant_id: Optional[str] = None
    custom_ingredients: List[Ingredient] = field(default_factory=list)
    selected_options: List[SelectedOptionDetail] = field(default_factory=list)
    image_url: Optional[str] = None
    notes: str = ""

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationFailedError(f"Quantity must be positive, got {self.quantity}")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Order:
    """
    Aggregate Root: A placed order of one customer at one restaurant.

    Status machine:
        pending → confirmed → preparing → ready → out_for_delivery → delivered
        (forward steps may be skipped)
        pending | confirmed | preparing → cancelled

    Payment: pending → paid → refunded.

    Identity: Defined by id (order_number is the human-facing code)
    """

    id: str
    order_number: str
    customer_id: str
    restaurant_id: str
    restaurant_name: str
    delivery_address: DeliveryAddress
    items: List[OrderItem]
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal
    payment_method: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    customer_name: str = ""
    customer_phone: Optional[str] = None
    special_instructions: Optional[str] = None
    estimated_delivery_time: Optional[datetime] = None
    actual_delivery_time: Optional[datetime] = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.items:
            raise ValidationFailedError("An order needs at least one item")

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def change_status(self, new_status: OrderStatus, at: Optional[datetime] = None) -> OrderStatus:
        """
        Move to new_status; delivering stamps actual_delivery_time.

        Returns:
            The previous status

        Raises:
            InvalidStatusTransitionError: If the move goes backwards or
                leaves a terminal status
        """
        previous = self.status
        if new_status == previous:
            raise InvalidStatusTransitionError(f"Order {self.id} is already {previous.value}")
        if previous.is_terminal:
            raise InvalidStatusTransitionError(
                f"Order {self.id} is {previous.value} and can no longer change"
            )
        if new_status == OrderStatus.CANCELLED:
            if previous not in _CANCELLABLE:
                raise InvalidStatusTransitionError(
                    f"Cannot cancel order {self.id} in status {previous.value}"
                )
        elif _FULFILMENT_SEQUENCE.index(new_status) < _FULFILMENT_SEQUENCE.index(previous):
            raise InvalidStatusTransitionError(
                f"Cannot move order {self.id} from {previous.value} back to {new_status.value}"
            )

        self.status = new_status
        if new_status == OrderStatus.DELIVERED and self.actual_delivery_time is None:
            self.actual_delivery_time = at or datetime.now(timezone.utc)
        self.touch()
        return previous

    def change_payment_status(self, new_status: PaymentStatus) -> None:
        if new_status == self.payment_status:
            return
        if new_status not in _PAYMENT_TRANSITIONS[self.payment_status]:
            raise InvalidStatusTransitionError(
                f"Cannot mark payment of order {self.id} {new_status.value} "
                f"while {self.payment_status.value}"
            )
        self.payment_status = new_status
        self.touch()

    def schedule_delivery(
        self,
        estimated: Optional[datetime] = None,
        actual: Optional[datetime] = None,
    ) -> None:
        if estimated is not None:
            self.estimated_delivery_time = estimated
        if actual is not None:
            self.actual_delivery_time = actual
        self.touch()

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
