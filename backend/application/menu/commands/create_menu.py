"""Create menu command and handler."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from application.menu.dtos import MenuInput
from application.shared.result import OperationResult, execute
from domain.menu.core.entities.menu import Menu
from domain.menu.core.events import PlateVariantsRegenerated
from domain.menu.core.factories import PlateFactory
from domain.shared.errors import NotFoundError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateMenuCommand:
    """
    Command: Create a restaurant menu.

    Attributes:
        restaurant_id: Owning restaurant (must exist)
        name: Menu name
        description: Optional description
        plates: Initial plate payloads (camelCase, see PlateInput)
    """

    restaurant_id: str
    name: str
    description: str = ""
    plates: List[Mapping[str, Any]] = field(default_factory=list)


class CreateMenuCommandHandler:
    """Handler for CreateMenuCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: IMenuRepository,
        event_bus: IEventBus,
        id_factory: Optional[IdFactory] = None,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus
        self._id_factory = id_factory or new_id

    async def handle(self, command: CreateMenuCommand) -> OperationResult[Menu]:
        """
        Execute create command.

        Flow:
        1. Validate payload
        2. Check the restaurant exists
        3. Build plates with their variant caches and save the menu
        4. Publish PlateVariantsRegenerated per plate

        Returns:
            OperationResult with the created Menu, or NOT_FOUND if the
            restaurant does not exist
        """
        return await execute("create_menu", lambda: self._create(command))

    async def _create(self, command: CreateMenuCommand) -> Menu:
        payload: Dict[str, Any] = {
            "restaurantId": command.restaurant_id,
            "name": command.name,
            "description": command.description,
            "plates": list(command.plates),
        }
        data = MenuInput.model_validate(payload)

        async def create(tx: ITransaction) -> Menu:
            if not await self._repository.restaurant_exists(data.restaurant_id, tx):
                raise NotFoundError(f"Restaurant {data.restaurant_id} not found")

            menu = Menu(
                id=self._id_factory(),
                restaurant_id=data.restaurant_id,
                name=data.name,
                description=data.description,
                plates=[
                    PlateFactory.create_plate(
                        name=plate.name,
                        base_price=plate.base_price,
                        description=plate.description,
                        base_ingredients=plate.base_ingredients,
                        sections=plate.section_payloads(),
                        image_url=plate.image_url,
                        active=plate.active,
                        id_factory=self._id_factory,
                    )
                    for plate in data.plates
                ],
            )
            await self._repository.save(menu, tx)
            return menu

        menu = await self._store.run_transaction(create)

        logger.info(
            "Menu created",
            extra={
                "menu_id": menu.id,
                "restaurant_id": menu.restaurant_id,
                "plate_count": len(menu.plates),
            },
        )

        for plate in menu.plates:
            await self._event_bus.publish(
                PlateVariantsRegenerated.create(
                    menu_id=menu.id,
                    plate_id=plate.id,
                    variant_count=len(plate.variants),
                )
            )

        return menu
