"""Regenerate variants command and handler.

Rebuilds the variant cache of every plate of a restaurant's menus. Used
after a change to the variant generation rules, or to repair menus written
by older clients.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from application.shared.result import OperationResult, execute
from domain.menu.core.entities.menu import Menu
from domain.menu.core.events import PlateVariantsRegenerated
from domain.menu.core.factories import PlateFactory
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegenerateVariantsCommand:
    """
    Command: Rebuild the variant caches of a restaurant's plates.

    Attributes:
        restaurant_id: Restaurant whose menus are processed
        menu_id: Restrict to one menu (None processes all of them)
    """

    restaurant_id: str
    menu_id: Optional[str] = None


@dataclass(frozen=True)
class RegenerationReport:
    menus: int
    plates: int
    variants: int


class RegenerateVariantsCommandHandler:
    """Handler for RegenerateVariantsCommand."""

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

    async def handle(self, command: RegenerateVariantsCommand) -> OperationResult[RegenerationReport]:
        return await execute("regenerate_variants", lambda: self._regenerate(command))

    async def _regenerate(self, command: RegenerateVariantsCommand) -> RegenerationReport:
        menu_ids = [
            menu.id
            for menu in await self._repository.list_by_restaurant(command.restaurant_id)
            if command.menu_id is None or menu.id == command.menu_id
        ]

        # One transaction per menu keeps each write small
        processed: List[Menu] = []
        for menu_id in menu_ids:
            menu = await self._store.run_transaction(
                lambda tx, menu_id=menu_id: self._regenerate_menu(menu_id, tx)
            )
            if menu is not None:
                processed.append(menu)

        report = RegenerationReport(
            menus=len(processed),
            plates=sum(len(menu.plates) for menu in processed),
            variants=sum(len(plate.variants) for menu in processed for plate in menu.plates),
        )
        logger.info(
            "Variant caches regenerated",
            extra={
                "restaurant_id": command.restaurant_id,
                "menus": report.menus,
                "plates": report.plates,
                "variants": report.variants,
            },
        )

        for menu in processed:
            for plate in menu.plates:
                await self._event_bus.publish(
                    PlateVariantsRegenerated.create(
                        menu_id=menu.id,
                        plate_id=plate.id,
                        variant_count=len(plate.variants),
                    )
                )
        return report

    async def _regenerate_menu(self, menu_id: str, tx: ITransaction) -> Optional[Menu]:
        menu = await self._repository.get_by_id(menu_id, tx)
        if menu is None:
            # Deleted since it was listed
            return None
        for plate in menu.plates:
            PlateFactory.regenerate_variants(plate, self._id_factory)
            plate.touch()
        menu.touch()
        await self._repository.save(menu, tx)
        return menu
