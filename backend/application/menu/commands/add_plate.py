"""Add plate command and handler."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from application.menu.dtos import PlateInput
from application.shared.result import OperationResult, execute
from domain.menu.core.entities.plate import Plate
from domain.menu.core.events import PlateVariantsRegenerated
from domain.menu.core.factories import PlateFactory
from domain.shared.errors import NotFoundError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddPlateCommand:
    """
    Command: Add a plate to a menu.

    Attributes:
        menu_id: Target menu
        plate: Plate payload (camelCase, see PlateInput)
    """

    menu_id: str
    plate: Mapping[str, Any]


class AddPlateCommandHandler:
    """Handler for AddPlateCommand."""

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

    async def handle(self, command: AddPlateCommand) -> OperationResult[Plate]:
        """
        Execute add command.

        The plate's sections get ids, option defaults are applied and the
        variant cache is generated before the menu is written.

        Returns:
            OperationResult with the new Plate
        """
        return await execute("add_plate", lambda: self._add(command))

    async def _add(self, command: AddPlateCommand) -> Plate:
        data = PlateInput.model_validate(command.plate)

        async def add(tx: ITransaction) -> Plate:
            menu = await self._repository.get_by_id(command.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {command.menu_id} not found")

            plate = PlateFactory.create_plate(
                name=data.name,
                base_price=data.base_price,
                description=data.description,
                base_ingredients=data.base_ingredients,
                sections=data.section_payloads(),
                image_url=data.image_url,
                active=data.active,
                id_factory=self._id_factory,
            )
            menu.add_plate(plate)
            await self._repository.save(menu, tx)
            return plate

        plate = await self._store.run_transaction(add)

        logger.info(
            "Plate added",
            extra={
                "menu_id": command.menu_id,
                "plate_id": plate.id,
                "variant_count": len(plate.variants),
            },
        )

        await self._event_bus.publish(
            PlateVariantsRegenerated.create(
                menu_id=command.menu_id,
                plate_id=plate.id,
                variant_count=len(plate.variants),
            )
        )
        return plate
