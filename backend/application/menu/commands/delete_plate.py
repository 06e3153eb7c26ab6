"""Delete plate command and handler."""

import logging
from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.menu.core.events import PlateDeleted
from domain.shared.errors import NotFoundError
from domain.shared.ports.document_store import IDocumentStore, ITransaction
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeletePlateCommand:
    """
    Command: Remove a plate from its menu.

    Carts and subscriptions keep their copies of the plate's name and
    price; they are not touched.
    """

    menu_id: str
    plate_id: str


class DeletePlateCommandHandler:
    """Handler for DeletePlateCommand."""

    def __init__(
        self,
        store: IDocumentStore,
        repository: IMenuRepository,
        event_bus: IEventBus,
    ):
        self._store = store
        self._repository = repository
        self._event_bus = event_bus

    async def handle(self, command: DeletePlateCommand) -> OperationResult[None]:
        return await execute("delete_plate", lambda: self._delete(command))

    async def _delete(self, command: DeletePlateCommand) -> None:
        async def delete(tx: ITransaction) -> None:
            menu = await self._repository.get_by_id(command.menu_id, tx)
            if menu is None:
                raise NotFoundError(f"Menu {command.menu_id} not found")
            menu.remove_plate(command.plate_id)
            await self._repository.save(menu, tx)

        await self._store.run_transaction(delete)

        logger.info(
            "Plate deleted",
            extra={"menu_id": command.menu_id, "plate_id": command.plate_id},
        )
        await self._event_bus.publish(
            PlateDeleted.create(menu_id=command.menu_id, plate_id=command.plate_id)
        )
