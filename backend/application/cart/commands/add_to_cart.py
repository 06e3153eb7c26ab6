"""Add to cart command and handler."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from application.cart.dtos import AddToCartInput
from application.shared.result import OperationResult, execute
from domain.cart.core.entities.cart import CartItem, ShoppingCart
from domain.cart.core.events import CartUpdated
from domain.menu.core.value_objects.selection import OptionSelection
from domain.menu.services.customization_resolver import (
    resolve_customization,
    validate_selections,
)
from domain.shared.errors import NotFoundError, ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.cart_repository import ICartRepository
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddToCartCommand:
    """
    Command: Add a customized plate to the customer's active cart.

    Attributes:
        customer_id: Cart owner
        menu_id: Menu the plate is ordered from
        plate_id: Plate to add
        quantity: Number of portions (> 0)
        selections: {"sectionId", "optionId"} pairs
        notes: Free-text notes for the kitchen
        restaurant_name: Display name used in cart conflict messages
    """

    customer_id: str
    menu_id: str
    plate_id: str
    quantity: int = 1
    selections: List[Mapping[str, Any]] = field(default_factory=list)
    notes: str = ""
    restaurant_name: Optional[str] = None


class AddToCartCommandHandler:
    """Handler for AddToCartCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        carts: ICartRepository,
        menus: IMenuRepository,
        event_bus: IEventBus,
        id_factory: Optional[IdFactory] = None,
    ):
        self._store = store
        self._carts = carts
        self._menus = menus
        self._event_bus = event_bus
        self._id_factory = id_factory or new_id

    async def handle(self, command: AddToCartCommand) -> OperationResult[ShoppingCart]:
        """
        Execute add command.

        Flow (one transaction):
        1. Read the plate and price the selections
        2. Load the active cart, or start one
        3. Add the item (merging an identical configuration)
        4. Save the cart and publish CartUpdated

        Returns:
            OperationResult with the cart; CONFLICT if the cart holds
            another restaurant's items, VALIDATION_FAILED if a required
            section has no selection
        """
        return await execute("add_to_cart", lambda: self._add(command))

    async def _add(self, command: AddToCartCommand) -> ShoppingCart:
        payload: Dict[str, Any] = {
            "customerId": command.customer_id,
            "menuId": command.menu_id,
            "plateId": command.plate_id,
            "quantity": command.quantity,
            "selections": list(command.selections),
            "notes": command.notes,
            "restaurantName": command.restaurant_name,
        }
        data = AddToCartInput.model_validate(payload)
        selections = [
            OptionSelection(section_id=s.section_id, option_id=s.option_id) for s in data.selections
        ]

        async def add(tx: ITransaction) -> ShoppingCart:
            menu = await self._menus.get_by_id(data.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {data.menu_id} not found")
            plate = menu.find_plate(data.plate_id)
            if not plate.active:
                raise ValidationFailedError(f"{plate.name} is not available")

            validate_selections(plate, selections)

            result = resolve_customization(plate, selections)
            if result.matched:
                variant = next(v for v in plate.variants if v.id == result.matched_variant_id)
                ingredients = list(variant.ingredients)
            else:
                ingredients = list(result.custom_ingredients or ())

            now = datetime.now(timezone.utc)
            cart = await self._carts.find_active(data.customer_id, tx)
            if cart is None:
                cart = ShoppingCart(
                    id=self._id_factory(),
                    customer_id=data.customer_id,
                    created_at=now,
                    updated_at=now,
                )

            cart.add_item(
                CartItem(
                    id=self._id_factory(),
                    menu_id=menu.id,
                    plate_id=plate.id,
                    plate_name=plate.name,
                    price=result.final_price,
                    quantity=data.quantity,
                    restaurant_id=menu.restaurant_id,
                    restaurant_name=data.restaurant_name or menu.restaurant_id,
                    variant_id=result.matched_variant_id,
                    custom_ingredients=ingredients,
                    selected_options=list(result.selected_options),
                    image_url=plate.image_url or None,
                    notes=data.notes,
                    added_at=now,
                )
            )
            await self._carts.save(cart, tx)
            return cart

        cart = await self._store.run_transaction(add)

        logger.info(
            "Item added to cart",
            extra={
                "cart_id": cart.id,
                "customer_id": cart.customer_id,
                "plate_id": data.plate_id,
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
