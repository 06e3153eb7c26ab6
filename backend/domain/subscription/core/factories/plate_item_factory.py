"""Factory for subscription plate items.

Raw items use the document field names (camelCase). The same parsing
helpers serve command input and stored documents.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from domain.menu.core.value_objects.selection import parse_selected_option
from domain.menu.services.ingredient_normalizer import normalize_ingredients
from domain.shared.errors import ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.shared.money import money_sum, to_decimal
from domain.subscription.core.entities.plate_item import SubscriptionPlateItem
from domain.subscription.core.value_objects.enums import ModificationAction
from domain.subscription.core.value_objects.ingredient_modification import (
    IngredientModification,
)


def parse_modification(raw: Mapping[str, Any]) -> IngredientModification:
    if not isinstance(raw, Mapping):
        raise ValidationFailedError(f"Malformed ingredient modification: {raw!r}")
    try:
        action = ModificationAction(raw.get("action"))
    except ValueError:
        raise ValidationFailedError(f"Unknown modification action: {raw.get('action')!r}")
    price_difference = raw.get("priceDifference")
    return IngredientModification(
        ingredient_id=str(raw.get("ingredientId", "")),
        ingredient_name=str(raw.get("ingredientName", "")),
        action=action,
        price_difference=None if price_difference is None else to_decimal(price_difference),
    )


def parse_quantity(value: Any) -> int:
    """
    Raises:
        ValidationFailedError: If value is not a positive integer
    """
    if isinstance(value, bool):
        raise ValidationFailedError(f"Invalid quantity: {value!r}")
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise ValidationFailedError(f"Invalid quantity: {value!r}")
    if quantity != value and not isinstance(value, str):
        raise ValidationFailedError(f"Quantity must be a whole number, got {value!r}")
    if quantity <= 0:
        raise ValidationFailedError(f"Quantity must be positive, got {quantity}")
    return quantity


class PlateItemFactory:
    """Factory for creating priced SubscriptionPlateItem entities."""

    @staticmethod
    def create(
        raw: Mapping[str, Any],
        now: datetime,
        id_factory: IdFactory = new_id,
    ) -> SubscriptionPlateItem:
        """
        Create an item with a fresh id and computed total.

        Cost defaults when the payload omits them:
        - optionsCost: Σ selectedOptions[].additionalCost
        - ingredientsCost: Σ priceDifference of add/extra modifications

        Args:
            raw: Item payload (plateId, plateName, basePrice, quantity, ...)
            now: Timestamp for addedAt and lastModifiedAt
            id_factory: Mints the item id

        Returns:
            SubscriptionPlateItem with total_price set

        Raises:
            ValidationFailedError: On quantity <= 0, negative or non-numeric
                base price, or malformed options/modifications

        Example:
            >>> item = PlateItemFactory.create(
            ...     {"plateId": "p1", "plateName": "Bowl", "basePrice": 10,
            ...      "variantPrice": 2, "optionsCost": 1.5, "quantity": 2},
            ...     now=datetime.now(timezone.utc),
            ... )
            >>> item.total_price
            Decimal('27.0')
        """
        if not isinstance(raw, Mapping):
            raise ValidationFailedError(f"Malformed plate item: {raw!r}")

        selected_options = [parse_selected_option(o) for o in raw.get("selectedOptions") or []]
        modifications = [parse_modification(m) for m in raw.get("ingredientModifications") or []]

        options_cost = raw.get("optionsCost")
        if options_cost is None:
            resolved_options_cost = money_sum(o.additional_cost for o in selected_options)
        else:
            resolved_options_cost = to_decimal(options_cost)

        ingredients_cost = raw.get("ingredientsCost")
        if ingredients_cost is None:
            resolved_ingredients_cost = money_sum(
                m.price_difference for m in modifications if m.is_charged and m.price_difference
            )
        else:
            resolved_ingredients_cost = to_decimal(ingredients_cost)

        variant_price = raw.get("variantPrice")
        custom_ingredients: Optional[List[Any]] = raw.get("customIngredients")

        item = SubscriptionPlateItem(
            id=id_factory(),
            plate_id=str(raw.get("plateId", "")),
            plate_name=str(raw.get("plateName", "")),
            plate_description=raw.get("plateDescription"),
            image_url=raw.get("imageUrl"),
            variant_id=raw.get("variantId"),
            variant_name=raw.get("variantName"),
            base_price=to_decimal(raw.get("basePrice")),
            variant_price=None if variant_price is None else to_decimal(variant_price),
            selected_options=selected_options,
            ingredient_modifications=modifications,
            custom_ingredients=(
                None if custom_ingredients is None else normalize_ingredients(custom_ingredients)
            ),
            options_cost=resolved_options_cost,
            ingredients_cost=resolved_ingredients_cost,
            quantity=parse_quantity(raw.get("quantity", 1)),
            total_price=Decimal("0"),
            notes=raw.get("notes"),
            added_at=now,
            last_modified_at=now,
        )
        item.total_price = item.calculate_total()
        return item
