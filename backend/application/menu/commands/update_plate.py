"""Update plate command and handler.

The variant cache is derived from base price, base ingredients and
sections. Whenever an update touches one of them the cache is rebuilt in
the same write, so a reader never sees new sections with old variants.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from application.menu.dtos import PlateUpdateInput
from application.shared.result import OperationResult, execute
from domain.menu.core.entities.plate import Plate
from domain.menu.core.events import PlateVariantsRegenerated
from domain.menu.core.factories import PlateFactory
from domain.menu.services.ingredient_normalizer import normalize_ingredients
from domain.shared.errors import NotFoundError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdatePlateCommand:
    """
    Command: Partially update a plate.

    Attributes:
        menu_id: Menu owning the plate
        plate_id: Plate to update
        changes: Fields to change (camelCase, see PlateUpdateInput)
    """

    menu_id: str
    plate_id: str
    changes: Mapping[str, Any]


class UpdatePlateCommandHandler:
    """Handler for UpdatePlateCommand."""

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

    async def handle(self, command: UpdatePlateCommand) -> OperationResult[Plate]:
        """
        Execute update command.

        Flow (one transaction, retried on conflict):
        1. Read the menu and locate the plate
        2. Apply the changed fields
        3. Regenerate variants if a variant source field changed
        4. Write the menu back

        Returns:
            OperationResult with the updated Plate
        """
        return await execute("update_plate", lambda: self._update(command))

    async def _update(self, command: UpdatePlateCommand) -> Plate:
        data = PlateUpdateInput.model_validate(command.changes)

        async def update(tx: ITransaction) -> Plate:
            menu = await self._repository.get_by_id(command.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {command.menu_id} not found")
            plate = menu.find_plate(command.plate_id)

            if data.name is not None:
                plate.name = data.name
            if data.description is not None:
                plate.description = data.description
            if data.image_url is not None:
                plate.image_url = data.image_url
            if data.active is not None:
                plate.active = data.active
            if data.base_price is not None:
                plate.base_price = data.base_price
            if data.base_ingredients is not None:
                plate.base_ingredients = normalize_ingredients(data.base_ingredients)

            sections = data.section_payloads()
            if sections is not None:
                plate.sections = PlateFactory.create_sections(sections, self._id_factory)

            if data.changes_variant_source:
                PlateFactory.regenerate_variants(plate, self._id_factory)

            plate.touch()
            menu.replace_plate(plate)
            await self._repository.save(menu, tx)
            return plate

        plate = await self._store.run_transaction(update)

        logger.info(
            "Plate updated",
            extra={
                "menu_id": command.menu_id,
                "plate_id": plate.id,
                "variants_regenerated": data.changes_variant_source,
            },
        )

        if data.changes_variant_source:
            await self._event_bus.publish(
                PlateVariantsRegenerated.create(
                    menu_id=command.menu_id,
                    plate_id=plate.id,
                    variant_count=len(plate.variants),
                )
            )
        return plate
