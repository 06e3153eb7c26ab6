"""Customize plate query - price a selection of options on a plate."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping

from application.menu.dtos import SelectionInput
from application.shared.result import OperationResult, execute
from domain.menu.core.value_objects.selection import OptionSelection
from domain.menu.services.customization_resolver import (
    CustomizationResult,
    resolve_customization,
    validate_selections,
)
from domain.shared.errors import NotFoundError
from domain.shared.ports.menu_repository import IMenuRepository

logger = logging.getLogger(__name__)


def parse_selections(raw: List[Mapping[str, Any]]) -> List[OptionSelection]:
    """
    Validate raw {"sectionId", "optionId"} pairs.

    Raises:
        pydantic.ValidationError: If a pair is malformed
    """
    return [
        OptionSelection(section_id=item.section_id, option_id=item.option_id)
        for item in (SelectionInput.model_validate(pair) for pair in raw)
    ]


@dataclass(frozen=True)
class CustomizePlateQuery:
    """
    Query: Price a plate customization.

    Attributes:
        menu_id: Menu owning the plate
        plate_id: Plate being customized
        selections: {"sectionId", "optionId"} pairs in any order
    """

    menu_id: str
    plate_id: str
    selections: List[Mapping[str, Any]] = field(default_factory=list)


class CustomizePlateQueryHandler:
    """Handler for CustomizePlateQuery."""

    def __init__(self, repository: IMenuRepository):
        self._repository = repository

    async def handle(self, query: CustomizePlateQuery) -> OperationResult[CustomizationResult]:
        """
        Execute query.

        Returns:
            OperationResult with the CustomizationResult, VALIDATION_FAILED
            when a required section has no selection or a single-choice
            section has several, NOT_FOUND for an unknown menu or plate

        Example:
            >>> result = await handler.handle(CustomizePlateQuery(
            ...     menu_id="m1", plate_id="croissant",
            ...     selections=[{"sectionId": "size", "optionId": "large"}],
            ... ))
            >>> result.data.final_price
            Decimal('5.49')
        """
        return await execute("customize_plate", lambda: self._customize(query))

    async def _customize(self, query: CustomizePlateQuery) -> CustomizationResult:
        selections = parse_selections(query.selections)

        menu = await self._repository.get_by_id(query.menu_id)
        if menu is None:
            raise NotFoundError(f"Menu {query.menu_id} not found")
        plate = menu.find_plate(query.plate_id)

        validate_selections(plate, selections)

        result = resolve_customization(plate, selections)

        logger.debug(
            "Plate customization priced",
            extra={
                "plate_id": plate.id,
                "final_price": str(result.final_price),
                "matched_variant": result.matched,
            },
        )
        return result
