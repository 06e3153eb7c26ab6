"""Raw payload builders shared by tests (camelCase, as stored)."""

from typing import Any, Dict, List


def croissant_payload() -> Dict[str, Any]:
    """Croissant: 3.99, required Size (Regular +0 / Large +1.50), optional Filling."""
    return {
        "name": "Croissant",
        "basePrice": 3.99,
        "baseIngredients": ["Flour", {"name": "Butter", "obligatory": True}],
        "sections": [
            {
                "id": "size",
                "name": "Size",
                "required": True,
                "options": [
                    {"id": "regular", "name": "Regular", "additionalCost": 0},
                    {"id": "large", "name": "Large", "additionalCost": 1.5},
                ],
            },
            {
                "id": "filling",
                "name": "Filling",
                "ingredientDependent": True,
                "options": [
                    {
                        "id": "chocolate",
                        "name": "Chocolate",
                        "additionalCost": 1.0,
                        "ingredients": [{"name": "Chocolate", "obligatory": False}],
                    },
                ],
            },
        ],
    }


def plate_item_payload(
    plate_id: str = "p1",
    plate_name: str = "Bowl",
    base_price: float = 10.0,
    quantity: int = 1,
    **extra: Any,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "plateId": plate_id,
        "plateName": plate_name,
        "basePrice": base_price,
        "quantity": quantity,
    }
    payload.update(extra)
    return payload


def meal_payload(meal_type: str, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": meal_type, "items": items}


def day_payload(day: str, meals: List[Dict[str, Any]], skip: bool = False) -> Dict[str, Any]:
    return {"day": day, "meals": meals, "skipDelivery": skip}


def weekly_schedule_payload() -> List[Dict[str, Any]]:
    """Three lunch days totaling 30.00 (10 + 2 × 5 + 10)."""
    return [
        day_payload("monday", [meal_payload("lunch", [plate_item_payload("p1", "Bowl", 10.0)])]),
        day_payload("wednesday", [meal_payload("lunch", [plate_item_payload("p2", "Wrap", 5.0, 2)])]),
        day_payload("friday", [meal_payload("lunch", [plate_item_payload("p1", "Bowl", 10.0)])]),
    ]


def subscription_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "customerId": "cust-1",
        "restaurantId": "rest-1",
        "restaurantName": "Trattoria",
        "frequency": "weekly",
        "schedule": weekly_schedule_payload(),
        "deliveryAddress": {
            "label": "Home",
            "address": "1 Main St",
            "city": "Springfield",
            "postalCode": "12345",
        },
        "paymentMethod": "card",
        "startDate": "2030-01-07T09:00:00+00:00",
    }
    payload.update(overrides)
    return payload
