"""Place order command and handler."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple

from application.order.dtos import PlaceOrderInput
from application.shared.result import OperationResult, execute
from domain.order.core.entities.order import Order
from domain.order.core.events import OrderPlaced
from domain.order.core.factories import generate_order_number, order_item_from_cart
from domain.order.services import compute_order_amounts
from domain.shared.errors import ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.order_repository import IOrderRepository
from domain.subscription.services import BillingPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaceOrderCommand:
    """
    Command: Check out the customer's active cart.

    Attributes:
        payload: Checkout payload (camelCase, see PlaceOrderInput)
    """

    payload: Mapping[str, Any]


class PlaceOrderCommandHandler:
    """Handler for PlaceOrderCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        carts: ICartRepository,
        orders: IOrderRepository,
        event_bus: IEventBus,
        billing_policy: Optional[BillingPolicy] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        """
        Initialize handler.

        Args:
            store: Document store (transaction boundary)
            carts: Cart repository port
            orders: Order repository port
            event_bus: Event bus port
            billing_policy: Delivery fee (one per order) and tax rate
            id_factory: Id generator for the order and its items
        """
        self._store = store
        self._carts = carts
        self._orders = orders
        self._event_bus = event_bus
        self._billing_policy = billing_policy or BillingPolicy()
        self._id_factory = id_factory or new_id

    async def handle(self, command: PlaceOrderCommand) -> OperationResult[Order]:
        """
        Execute place order command.

        Flow (one transaction):
        1. Load the active cart; an empty or missing cart is rejected
        2. Copy its items and price the order (subtotal, fee, tax)
        3. Save the order as pending and deactivate the cart
        4. Publish OrderPlaced

        Returns:
            OperationResult with the order, VALIDATION_FAILED for an empty
            cart or a malformed payload
        """
        return await execute("place_order", lambda: self._place(command))

    async def _place(self, command: PlaceOrderCommand) -> Order:
        data = PlaceOrderInput.model_validate(command.payload)
        address = data.delivery_address.to_domain()

        async def place(tx: ITransaction) -> Tuple[Order, str]:
            cart = await self._carts.find_active(data.customer_id, tx)
            if cart is None or not cart.items:
                raise ValidationFailedError("Your cart is empty")

            now = datetime.now(timezone.utc)
            items = [order_item_from_cart(item, self._id_factory) for item in cart.items]
            amounts = compute_order_amounts(
                items,
                self._billing_policy.delivery_fee_per_delivery,
                self._billing_policy.tax_rate,
            )
            order = Order(
                id=self._id_factory(),
                order_number=generate_order_number(now),
                customer_id=data.customer_id,
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                restaurant_id=cart.restaurant_id,
                restaurant_name=cart.restaurant_name,
                delivery_address=address,
                items=items,
                subtotal=amounts.subtotal,
                delivery_fee=amounts.delivery_fee,
                tax=amounts.tax,
                total=amounts.total,
                payment_method=data.payment_method,
                special_instructions=data.special_instructions,
                created_at=now,
                updated_at=now,
            )

            cart.active = False
            cart.touch()
            await self._carts.save(cart, tx)
            await self._orders.save(order, tx)
            return order, cart.id

        order, cart_id = await self._store.run_transaction(place)

        logger.info(
            "Order placed",
            extra={
                "order_id": order.id,
                "order_number": order.order_number,
                "customer_id": order.customer_id,
                "cart_id": cart_id,
                "restaurant_id": order.restaurant_id,
                "total": str(order.total),
            },
        )

        await self._event_bus.publish(
            OrderPlaced.create(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=order.customer_id,
                restaurant_id=order.restaurant_id,
                cart_id=cart_id,
                total=order.total,
            )
        )
        return order
