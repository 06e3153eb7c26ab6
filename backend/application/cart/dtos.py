"""Input models for cart commands."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from application.menu.dtos import SelectionInput


class AddToCartInput(BaseModel):
    """
    A customized plate to put in the cart.

    Price and variant are never taken from the client: they are resolved
    from the menu's plate and the selections.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_id: str = Field(..., min_length=1, alias="customerId")
    menu_id: str = Field(..., min_length=1, alias="menuId")
    plate_id: str = Field(..., min_length=1, alias="plateId")
    quantity: int = Field(default=1, gt=0)
    selections: List[SelectionInput] = Field(default_factory=list)
    notes: str = ""
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName")
