"""Delivery address value object."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class DeliveryAddress:
    """Where subscription meals are delivered.

    Examples:
        >>> DeliveryAddress(id="a1", label="Home", address="Via Roma 1",
        ...                 city="Milano", postal_code="20100")
    """

    id: str
    label: str
    address: str
    city: str
    postal_code: str
    apartment: Optional[str] = None
    instructions: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    is_default: bool = False
