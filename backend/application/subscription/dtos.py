"""
Input models for subscription commands.

The schedule itself is validated item by item by the schedule builder,
which owns the pricing rules; these models cover the envelope.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.shared.identifiers import new_id
from domain.subscription.core.value_objects.delivery_address import Coordinates, DeliveryAddress
from domain.subscription.core.value_objects.enums import SubscriptionFrequency


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class CoordinatesInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class DeliveryAddressInput(BaseModel):
    """Delivery address of a subscription or an order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[str] = None
    label: str = ""
    address: str = Field(..., min_length=1)
    apartment: Optional[str] = None
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1, alias="postalCode")
    instructions: Optional[str] = None
    coordinates: Optional[CoordinatesInput] = None
    is_default: bool = Field(default=False, alias="isDefault")

    def to_domain(self) -> DeliveryAddress:
        return DeliveryAddress(
            id=self.id or new_id(),
            label=self.label,
            address=self.address,
            city=self.city,
            postal_code=self.postal_code,
            apartment=self.apartment,
            instructions=self.instructions,
            coordinates=(
                Coordinates(lat=self.coordinates.lat, lng=self.coordinates.lng)
                if self.coordinates
                else None
            ),
            is_default=self.is_default,
        )


class CreateSubscriptionInput(BaseModel):
    """
    Subscription creation payload.

    Naive datetimes are read as UTC.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_id: str = Field(..., min_length=1, alias="customerId")
    restaurant_id: str = Field(..., min_length=1, alias="restaurantId")
    frequency: SubscriptionFrequency = SubscriptionFrequency.WEEKLY
    schedule: List[Dict[str, Any]] = Field(..., min_length=1, description="Day payloads")
    delivery_address: DeliveryAddressInput = Field(..., alias="deliveryAddress")
    payment_method: str = Field(..., min_length=1, alias="paymentMethod")
    start_date: datetime = Field(..., alias="startDate")
    end_date: Optional[datetime] = Field(default=None, alias="endDate")
    default_delivery_time: Optional[str] = Field(default=None, alias="defaultDeliveryTime")
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName")

    @field_validator("frequency", mode="before")
    @classmethod
    def parse_frequency(cls, v: Any) -> SubscriptionFrequency:
        return SubscriptionFrequency.parse(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: Optional[datetime], info) -> Optional[datetime]:
        start = info.data.get("start_date")
        if v is not None and start is not None and v <= start:
            raise ValueError("endDate must be after startDate")
        return v
