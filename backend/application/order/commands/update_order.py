"""Update order command and handler."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from application.order.dtos import UpdateOrderInput
from application.shared.result import OperationResult, execute
from domain.order.core.entities.order import Order
from domain.order.core.events import OrderStatusChanged
from domain.order.core.value_objects.enums import OrderStatus
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.order_repository import IOrderRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdateOrderCommand:
    """
    Command: Advance an order's fulfilment or payment.

    Attributes:
        order_id: Order to update
        payload: Any of status, paymentStatus, estimatedDeliveryTime,
            actualDeliveryTime (camelCase, see UpdateOrderInput)
    """

    order_id: str
    payload: Mapping[str, Any]


class UpdateOrderCommandHandler:
    """Handler for UpdateOrderCommand."""

    def __init__(self, store: IDocumentStore, orders: IOrderRepository, event_bus: IEventBus):
        self._store = store
        self._orders = orders
        self._event_bus = event_bus

    async def handle(self, command: UpdateOrderCommand) -> OperationResult[Order]:
        """
        Execute update command.

        Delivery times are applied first, so a delivered status keeps an
        explicit actualDeliveryTime. OrderStatusChanged is published only
        when the status moved.

        Returns:
            OperationResult with the updated order, NOT_FOUND for an
            unknown order, INVALID_STATUS_TRANSITION for a move the
            status machine forbids
        """
        return await execute("update_order", lambda: self._update(command))

    async def _update(self, command: UpdateOrderCommand) -> Order:
        data = UpdateOrderInput.model_validate(command.payload)

        async def update(tx: ITransaction) -> Tuple[Order, Optional[OrderStatus]]:
            order = await self._orders.get_by_id(command.order_id, tx)
            if order is None:
                raise NotFoundError(f"Order {command.order_id} not found")

            if data.estimated_delivery_time or data.actual_delivery_time:
                order.schedule_delivery(data.estimated_delivery_time, data.actual_delivery_time)
            previous = None
            if data.status is not None:
                previous = order.change_status(data.status)
            if data.payment_status is not None:
                order.change_payment_status(data.payment_status)

            await self._orders.save(order, tx)
            return order, previous

        order, previous = await self._store.run_transaction(update)

        logger.info(
            "Order updated",
            extra={
                "order_id": order.id,
                "status": order.status.value,
                "payment_status": order.payment_status.value,
            },
        )

        if previous is not None:
            await self._event_bus.publish(
                OrderStatusChanged.create(
                    order_id=order.id,
                    customer_id=order.customer_id,
                    previous_status=previous,
                    new_status=order.status,
                )
            )
        return order
