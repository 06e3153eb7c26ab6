"""Factory for creating Plate entities from raw payloads.

Raw payloads use the document field names (camelCase), both for command
input and for stored documents, so the same code parses either.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from domain.menu.core.entities.plate import Plate
from domain.menu.core.value_objects.section import MenuOption, MenuSection
from domain.menu.services.ingredient_normalizer import normalize_ingredients
from domain.menu.services.variant_generator import generate_variants
from domain.shared.errors import ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.money import to_decimal


class PlateFactory:
    """Factory for creating plates and their sections with proper defaults."""

    @staticmethod
    def create_option(raw: Mapping[str, Any], id_factory: IdFactory = new_id) -> MenuOption:
        """
        Create an option, minting an id when the payload has none.

        Unparseable additionalCost is treated as 0.
        """
        if not isinstance(raw, Mapping):
            raise ValidationFailedError(f"Malformed option payload: {raw!r}")

        return MenuOption(
            id=raw.get("id") or id_factory(),
            name=str(raw.get("name", "")),
            additional_cost=to_decimal(raw.get("additionalCost"), strict=False),
            ingredients=tuple(normalize_ingredients(raw.get("ingredients"))),
        )

    @staticmethod
    def create_sections(
        raw_sections: Optional[Iterable[Mapping[str, Any]]],
        id_factory: IdFactory = new_id,
    ) -> List[MenuSection]:
        """
        Create sections from raw payloads.

        Defaults: required, multiple and ingredientDependent False; options
        empty; option additionalCost 0 and ingredients empty.

        Raises:
            ValidationFailedError: If a section or option is not a mapping

        Example:
            >>> sections = PlateFactory.create_sections([
            ...     {"name": "Size", "required": True, "options": [
            ...         {"name": "Regular"}, {"name": "Large", "additionalCost": 1.5}]}
            ... ])
            >>> [o.name for o in sections[0].options]
            ['Regular', 'Large']
        """
        sections: List[MenuSection] = []
        for raw in raw_sections or []:
            if not isinstance(raw, Mapping):
                raise ValidationFailedError(f"Malformed section payload: {raw!r}")
            sections.append(
                MenuSection(
                    id=raw.get("id") or id_factory(),
                    name=str(raw.get("name", "")),
                    required=bool(raw.get("required", False)),
                    multiple=bool(raw.get("multiple", False)),
                    ingredient_dependent=bool(raw.get("ingredientDependent", False)),
                    options=tuple(
                        PlateFactory.create_option(option, id_factory)
                        for option in raw.get("options") or []
                    ),
                )
            )
        return sections

    @staticmethod
    def create_plate(
        name: str,
        base_price: Any,
        description: str = "",
        base_ingredients: Optional[Iterable[Any]] = None,
        sections: Optional[Iterable[Mapping[str, Any]]] = None,
        image_url: str = "",
        active: bool = True,
        plate_id: Optional[str] = None,
        id_factory: IdFactory = new_id,
    ) -> Plate:
        """
        Create a new plate with its variant cache generated.

        Raises:
            ValidationFailedError: If base_price is not numeric or negative
        """
        now = datetime.now(timezone.utc)
        plate = Plate(
            id=plate_id or id_factory(),
            name=name,
            description=description,
            base_price=to_decimal(base_price),
            base_ingredients=normalize_ingredients(base_ingredients),
            image_url=image_url,
            active=active,
            sections=PlateFactory.create_sections(sections, id_factory),
            created_at=now,
            updated_at=now,
        )
        PlateFactory.regenerate_variants(plate, id_factory)
        return plate

    @staticmethod
    def regenerate_variants(plate: Plate, id_factory: IdFactory = new_id) -> Plate:
        """Overwrite the plate's variant cache from its current source fields."""
        plate.variants = generate_variants(
            plate.base_price,
            plate.base_ingredients,
            plate.sections,
            id_factory,
        )
        return plate
