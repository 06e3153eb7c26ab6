"""Input models for order commands."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from application.subscription.dtos import DeliveryAddressInput, as_utc
from domain.order.core.value_objects.enums import OrderStatus, PaymentStatus


class PlaceOrderInput(BaseModel):
    """
    Checkout payload.

    Items, prices and the restaurant come from the customer's active cart,
    never from the client.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_id: str = Field(..., min_length=1, alias="customerId")
    delivery_address: DeliveryAddressInput = Field(..., alias="deliveryAddress")
    payment_method: str = Field(..., min_length=1, alias="paymentMethod")
    customer_name: str = Field(default="", alias="customerName")
    customer_phone: Optional[str] = Field(default=None, alias="customerPhone")
    special_instructions: Optional[str] = Field(default=None, alias="specialInstructions")


class UpdateOrderInput(BaseModel):
    """Order update; at least one field must be set. Naive datetimes are UTC."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = Field(default=None, alias="paymentStatus")
    estimated_delivery_time: Optional[datetime] = Field(default=None, alias="estimatedDeliveryTime")
    actual_delivery_time: Optional[datetime] = Field(default=None, alias="actualDeliveryTime")

    @field_validator("estimated_delivery_time", "actual_delivery_time")
    @classmethod
    def validate_timezone(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @model_validator(mode="after")
    def validate_not_empty(self) -> "UpdateOrderInput":
        if (
            self.status is None
            and self.payment_status is None
            and self.estimated_delivery_time is None
            and self.actual_delivery_time is None
        ):
            raise ValueError("Nothing to update")
        return self
