"""
Input models for menu and plate commands.

Payloads arrive with the document field names (camelCase). The models
validate shapes and bounds, then hand plain camelCase dicts to the domain
factories, which apply the defaults. Ingredient lists are kept as raw
values because legacy shapes are normalized by the domain.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OptionInput(BaseModel):
    """
    One option of a customization section.

    additionalCost may be negative (discount options).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(..., min_length=1, description="Option label shown to customers")
    additional_cost: Decimal = Field(
        default=Decimal("0"), alias="additionalCost", description="Added to the plate base price"
    )
    ingredients: Optional[List[Any]] = None

    @field_validator("additional_cost")
    @classmethod
    def validate_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("additionalCost must be a finite number")
        return v


class SectionInput(BaseModel):
    """Customization section (e.g. "Size", "Filling")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    required: bool = False
    multiple: bool = False
    ingredient_dependent: bool = Field(default=False, alias="ingredientDependent")
    options: List[OptionInput] = Field(default_factory=list)


class PlateInput(BaseModel):
    """
    Plate creation payload.

    Example:
        >>> PlateInput.model_validate({
        ...     "name": "Croissant",
        ...     "basePrice": 3.99,
        ...     "sections": [{"name": "Size", "required": True,
        ...                   "options": [{"name": "Regular"}, {"name": "Large", "additionalCost": 1.5}]}],
        ... }).base_price
        Decimal('3.99')
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    base_price: Decimal = Field(..., ge=0, alias="basePrice", description="Price without options")
    base_ingredients: Optional[List[Any]] = Field(default=None, alias="baseIngredients")
    image_url: str = Field(default="", alias="imageUrl")
    active: bool = True
    sections: List[SectionInput] = Field(default_factory=list)

    @field_validator("base_price")
    @classmethod
    def validate_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("basePrice must be a finite number")
        return v

    def section_payloads(self) -> List[Dict[str, Any]]:
        return [section.model_dump(by_alias=True, exclude_none=True) for section in self.sections]


class PlateUpdateInput(BaseModel):
    """Partial plate update: only the fields present are changed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0, alias="basePrice")
    base_ingredients: Optional[List[Any]] = Field(default=None, alias="baseIngredients")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    active: Optional[bool] = None
    sections: Optional[List[SectionInput]] = None

    @property
    def changes_variant_source(self) -> bool:
        """True if the update touches a field the variant cache is derived from."""
        return (
            self.base_price is not None
            or self.base_ingredients is not None
            or self.sections is not None
        )

    def section_payloads(self) -> Optional[List[Dict[str, Any]]]:
        if self.sections is None:
            return None
        return [section.model_dump(by_alias=True, exclude_none=True) for section in self.sections]


class MenuInput(BaseModel):
    """Menu creation payload, optionally with its initial plates."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    restaurant_id: str = Field(..., min_length=1, alias="restaurantId")
    name: str = Field(..., min_length=1)
    description: str = ""
    plates: List[PlateInput] = Field(default_factory=list)


class MenuUpdateInput(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    active: Optional[bool] = None


class SelectionInput(BaseModel):
    """A (sectionId, optionId) pair chosen by the customer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    section_id: str = Field(..., alias="sectionId")
    option_id: str = Field(..., alias="optionId")
