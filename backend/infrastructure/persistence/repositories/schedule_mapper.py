"""Document mapping of subscription schedules.

Shared by the subscription and delivery repositories: both embed
SubscriptionMeal subdocuments.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from domain.menu.core.value_objects.selection import parse_selected_option
from domain.subscription.core.entities.day import SubscriptionDay
from domain.subscription.core.entities.meal import SubscriptionMeal
from domain.subscription.core.entities.plate_item import SubscriptionPlateItem
from domain.subscription.core.factories.plate_item_factory import parse_modification
from domain.subscription.core.value_objects.enums import DayOfWeek, MealTime
from infrastructure.persistence.repositories.base import DocumentRepository as Fields


class ScheduleMapper:
    """Converts schedule entities to and from camelCase subdocuments.

    Stored totals are read back as stored; they are recomputed only by
    the schedule builder.
    """

    # ============================================================
    # Entity → document
    # ============================================================

    def day_to_dict(self, day: SubscriptionDay) -> Dict[str, Any]:
        return {
            "id": day.id,
            "day": day.day.value,
            "date": day.date,
            "meals": [self.meal_to_dict(meal) for meal in day.meals],
            "dayTotal": Fields.money_to_number(day.day_total),
            "skipDelivery": day.skip_delivery,
        }

    def meal_to_dict(self, meal: SubscriptionMeal) -> Dict[str, Any]:
        return {
            "id": meal.id,
            "type": meal.type.value,
            "deliveryTime": meal.delivery_time,
            "items": [self.item_to_dict(item) for item in meal.items],
            "mealTotal": Fields.money_to_number(meal.meal_total),
            "specialInstructions": meal.special_instructions,
            "completed": meal.completed,
        }

    def item_to_dict(self, item: SubscriptionPlateItem) -> Dict[str, Any]:
        return {
            "id": item.id,
            "plateId": item.plate_id,
            "plateName": item.plate_name,
            "plateDescription": item.plate_description,
            "imageUrl": item.image_url,
            "variantId": item.variant_id,
            "variantName": item.variant_name,
            "basePrice": Fields.money_to_number(item.base_price),
            "variantPrice": Fields.money_to_number(item.variant_price),
            "selectedOptions": [Fields.selected_option_to_dict(o) for o in item.selected_options],
            "ingredientModifications": [
                {
                    "ingredientId": m.ingredient_id,
                    "ingredientName": m.ingredient_name,
                    "action": m.action.value,
                    "priceDifference": Fields.money_to_number(m.price_difference),
                }
                for m in item.ingredient_modifications
            ],
            "customIngredients": (
                None
                if item.custom_ingredients is None
                else Fields.ingredients_to_list(item.custom_ingredients)
            ),
            "optionsCost": Fields.money_to_number(item.options_cost),
            "ingredientsCost": Fields.money_to_number(item.ingredients_cost),
            "totalPrice": Fields.money_to_number(item.total_price),
            "quantity": item.quantity,
            "notes": item.notes,
            "addedAt": Fields.datetime_to_iso(item.added_at),
            "lastModifiedAt": Fields.datetime_to_iso(item.last_modified_at),
        }

    # ============================================================
    # Document → entity
    # ============================================================

    def dict_to_day(self, data: Dict[str, Any]) -> SubscriptionDay:
        return SubscriptionDay(
            id=data["id"],
            day=DayOfWeek(data["day"]),
            date=data.get("date"),
            meals=self.dicts_to_meals(data.get("meals")),
            day_total=Fields.number_to_money(data.get("dayTotal")),
            skip_delivery=bool(data.get("skipDelivery", False)),
        )

    def dicts_to_meals(self, raw: Any) -> List[SubscriptionMeal]:
        return [self.dict_to_meal(meal) for meal in raw or []]

    def dict_to_meal(self, data: Dict[str, Any]) -> SubscriptionMeal:
        return SubscriptionMeal(
            id=data["id"],
            type=MealTime(data["type"]),
            delivery_time=data.get("deliveryTime"),
            items=[self.dict_to_item(item) for item in data.get("items") or []],
            meal_total=Fields.number_to_money(data.get("mealTotal")),
            special_instructions=data.get("specialInstructions"),
            completed=bool(data.get("completed", False)),
        )

    def dict_to_item(self, data: Dict[str, Any]) -> SubscriptionPlateItem:
        variant_price = data.get("variantPrice")
        custom_ingredients = data.get("customIngredients")
        return SubscriptionPlateItem(
            id=data["id"],
            plate_id=data.get("plateId", ""),
            plate_name=data.get("plateName", ""),
            plate_description=data.get("plateDescription"),
            image_url=data.get("imageUrl"),
            variant_id=data.get("variantId"),
            variant_name=data.get("variantName"),
            base_price=Fields.number_to_money(data.get("basePrice")),
            variant_price=None if variant_price is None else Fields.number_to_money(variant_price),
            selected_options=[parse_selected_option(o) for o in data.get("selectedOptions") or []],
            ingredient_modifications=[
                parse_modification(m) for m in data.get("ingredientModifications") or []
            ],
            custom_ingredients=(
                None
                if custom_ingredients is None
                else Fields.list_to_ingredients(custom_ingredients)
            ),
            options_cost=Fields.number_to_money(data.get("optionsCost")),
            ingredients_cost=Fields.number_to_money(data.get("ingredientsCost")),
            total_price=Fields.number_to_money(data.get("totalPrice")),
            quantity=int(data.get("quantity", 1)),
            notes=data.get("notes"),
            added_at=Fields.iso_to_datetime(data.get("addedAt")) or datetime.now(timezone.utc),
            last_modified_at=Fields.iso_to_datetime(data.get("lastModifiedAt")),
        )
