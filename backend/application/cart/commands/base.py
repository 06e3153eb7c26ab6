"""Shared flow of the cart commands that edit an existing cart."""

import logging
from typing import Callable

from domain.cart.core.entities.cart import ShoppingCart
from domain.cart.core.events import CartUpdated
from domain.shared.errors import NotFoundError
from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)


class CartMutationHandler:
    """Base for handlers that load the active cart, change it and save it."""

    def __init__(
        self,
        store: IDocumentStore,
        carts: ICartRepository,
        event_bus: IEventBus,
    ):
        self._store = store
        self._carts = carts
        self._event_bus = event_bus

    async def _mutate(
        self,
        customer_id: str,
        action: str,
        change: Callable[[ShoppingCart], None],
    ) -> ShoppingCart:
        """
        Apply change to the customer's active cart in one transaction.

        Raises:
            NotFoundError: If the customer has no active cart
        """

        async def mutate(tx: ITransaction) -> ShoppingCart:
            cart = await self._carts.find_active(customer_id, tx)
            if cart is None:
                raise NotFoundError(f"No active cart for customer {customer_id}")
            change(cart)
            await self._carts.save(cart, tx)
            return cart

        cart = await self._store.run_transaction(mutate)

        logger.info(
            "Cart updated",
            extra={
                "action": action,
                "cart_id": cart.id,
                "customer_id": customer_id,
                "total_items": cart.total_items,
            },
        )

        await self._event_bus.publish(
            CartUpdated.create(
                cart_id=cart.id,
                customer_id=cart.customer_id,
                total_items=cart.total_items,
            )
        )
        return cart
