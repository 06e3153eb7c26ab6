"""Get plate query - retrieve a single plate of a menu."""

import logging
from dataclasses import dataclass

from application.shared.result import OperationResult, execute
from domain.menu.core.entities.plate import Plate
from domain.shared.errors import NotFoundError
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetPlateQuery:
    menu_id: str
    plate_id: str


class GetPlateQueryHandler:
    """Handler for GetPlateQuery."""

    def __init__(self, repository: IMenuRepository):
        self._repository = repository

    async def handle(self, query: GetPlateQuery) -> OperationResult[Plate]:
        return await execute("get_plate", lambda: self._get(query))

    async def _get(self, query: GetPlateQuery) -> Plate:
        menu = await self._repository.get_by_id(query.menu_id)
        if menu is None:
            raise NotFoundError(f"Menu {query.menu_id} not found")
        plate = menu.find_plate(query.plate_id)

        logger.debug(
            "Plate retrieved",
            extra={
                "menu_id": query.menu_id,
                "plate_id": plate.id,
                "variant_count": len(plate.variants),
            },
        )
        return plate
