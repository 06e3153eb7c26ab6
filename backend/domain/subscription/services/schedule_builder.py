"""Subscription schedule builder.

Builds the days → meals → items tree of a subscription from raw payloads,
keeping day and meal ids stable across edits and computing totals
bottom-up.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set

from domain.shared.errors import NotFoundError, ValidationFailedError
from domain.shared.identifiers import IdFactory, new_id
from domain.subscription.core.entities.day import SubscriptionDay
from domain.subscription.core.entities.meal import SubscriptionMeal
from domain.subscription.core.factories.plate_item_factory import PlateItemFactory
from domain.subscription.core.value_objects.enums import DayOfWeek, MealTime

logger = logging.getLogger(__name__)


def _parse_day_of_week(value: Any) -> DayOfWeek:
    try:
        return DayOfWeek(value)
    except ValueError:
        raise ValidationFailedError(f"Unknown day of week: {value!r}")


def _parse_meal_time(value: Any) -> MealTime:
    try:
        return MealTime(value)
    except ValueError:
        raise ValidationFailedError(f"Unknown meal type: {value!r}")


def _build_meal(
    raw: Mapping[str, Any],
    previous_day: Optional[SubscriptionDay],
    used_meal_ids: Set[str],
    now: datetime,
    id_factory: IdFactory,
) -> SubscriptionMeal:
    if not isinstance(raw, Mapping):
        raise ValidationFailedError(f"Malformed meal payload: {raw!r}")

    meal_type = _parse_meal_time(raw.get("type"))
    meal_id = None
    if previous_day is not None:
        previous_meal = previous_day.find_meal_by_type(meal_type)
        if previous_meal is not None and previous_meal.id not in used_meal_ids:
            meal_id = previous_meal.id
    meal_id = meal_id or id_factory()
    used_meal_ids.add(meal_id)

    meal = SubscriptionMeal(
        id=meal_id,
        type=meal_type,
        items=[PlateItemFactory.create(item, now, id_factory) for item in raw.get("items") or []],
        delivery_time=raw.get("deliveryTime"),
        special_instructions=raw.get("specialInstructions"),
        completed=bool(raw.get("completed", False)),
    )
    meal.meal_total = meal.calculate_total()
    return meal


def build_schedule(
    raw_schedule: Iterable[Mapping[str, Any]],
    previous_schedule: Optional[Sequence[SubscriptionDay]] = None,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> List[SubscriptionDay]:
    """
    Build a priced schedule from raw day payloads.

    Identity rules:
    - a day reuses the id of the previous day with the same day of week
    - a meal reuses the id of the matched previous day's meal of the same type
    - every item gets a fresh id (items are replaced, never diffed)

    A previous id is reused at most once, so duplicated day or meal keys
    in the payload still get distinct ids.

    Totals:
    - item.total_price = (base + variant + options + ingredients) × quantity
    - meal.meal_total = Σ item.total_price
    - day.day_total = Σ meal.meal_total, 0 for a skipped day

    Args:
        raw_schedule: Day payloads ({day, date?, meals, skipDelivery?})
        previous_schedule: Current schedule to take ids from, if any
        now: Timestamp for new items (default: now UTC)
        id_factory: Mints ids for new days, meals and items

    Returns:
        New list of SubscriptionDay in payload order

    Raises:
        ValidationFailedError: On unknown day/meal keys or invalid items
    """
    now = now or datetime.now(timezone.utc)
    previous_days = list(previous_schedule or [])
    used_day_ids: Set[str] = set()
    used_meal_ids: Set[str] = set()

    schedule: List[SubscriptionDay] = []
    for raw_day in raw_schedule:
        if not isinstance(raw_day, Mapping):
            raise ValidationFailedError(f"Malformed day payload: {raw_day!r}")

        day_of_week = _parse_day_of_week(raw_day.get("day"))
        previous_day = next(
            (d for d in previous_days if d.day == day_of_week and d.id not in used_day_ids),
            None,
        )
        day_id = previous_day.id if previous_day is not None else id_factory()
        used_day_ids.add(day_id)

        day = SubscriptionDay(
            id=day_id,
            day=day_of_week,
            date=raw_day.get("date"),
            meals=[
                _build_meal(raw_meal, previous_day, used_meal_ids, now, id_factory)
                for raw_meal in raw_day.get("meals") or []
            ],
            skip_delivery=bool(raw_day.get("skipDelivery", False)),
        )
        day.day_total = day.calculate_total()
        schedule.append(day)

    logger.debug(
        "Schedule built",
        extra={
            "days": len(schedule),
            "reused_day_ids": sum(1 for d in schedule if any(d.id == p.id for p in previous_days)),
        },
    )

    return schedule


def replace_meal_items(
    schedule: Sequence[SubscriptionDay],
    day_id: str,
    meal_id: str,
    raw_items: Iterable[Mapping[str, Any]],
    delivery_time: Optional[str] = None,
    special_instructions: Optional[str] = None,
    now: Optional[datetime] = None,
    id_factory: IdFactory = new_id,
) -> List[SubscriptionDay]:
    """
    Replace the items of one meal and recompute its totals.

    All items of the meal get fresh ids. The meal's delivery time and
    special instructions change only when new values are given. Other
    days are returned as they are.

    Returns:
        New schedule list; the input schedule is not modified

    Raises:
        NotFoundError: If day_id or meal_id is unknown
        ValidationFailedError: If an item is invalid
    """
    now = now or datetime.now(timezone.utc)

    day = next((d for d in schedule if d.id == day_id), None)
    if day is None:
        raise NotFoundError(f"Day with id {day_id} not found in subscription")
    meal = day.find_meal(meal_id)
    if meal is None:
        raise NotFoundError(f"Meal with id {meal_id} not found in day {day_id}")

    updated_meal = replace(
        meal,
        items=[PlateItemFactory.create(item, now, id_factory) for item in raw_items],
        delivery_time=delivery_time or meal.delivery_time,
        special_instructions=special_instructions or meal.special_instructions,
    )
    updated_meal.meal_total = updated_meal.calculate_total()

    updated_day = replace(
        day,
        meals=[updated_meal if m.id == meal_id else m for m in day.meals],
    )
    updated_day.day_total = updated_day.calculate_total()

    return [updated_day if d.id == day_id else d for d in schedule]
