"""Shared test fixtures.

Tests run against the in-memory document store; nothing here needs a
database or network access.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from itertools import count
from pathlib import Path
from typing import Callable, Iterator, List, Optional
from unittest.mock import AsyncMock

import pytest
from dotenv import load_dotenv

from domain.menu.core.entities.menu import Menu
from domain.menu.core.entities.plate import Plate
from domain.menu.core.factories import PlateFactory
from domain.order.core.entities.order import Order, OrderItem
from domain.subscription.core.entities.subscription import Subscription
from domain.subscription.core.value_objects.delivery_address import DeliveryAddress
from domain.subscription.core.value_objects.enums import SubscriptionFrequency, SubscriptionStatus
from domain.subscription.services import BillingPolicy, build_schedule
from infrastructure.persistence.factory import reset_document_store
from infrastructure.persistence.in_memory.document_store import InMemoryDocumentStore
from payloads import croissant_payload, weekly_schedule_payload

NOW = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Predictable ids: id-1, id-2, ..."""
    counter = count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store."""
    return InMemoryDocumentStore(max_attempts=3)


@pytest.fixture
def event_bus() -> AsyncMock:
    """Event bus mock; assert on event_bus.publish."""
    return AsyncMock()


@pytest.fixture
def croissant() -> Plate:
    payload = croissant_payload()
    return PlateFactory.create_plate(
        name=payload["name"],
        base_price=payload["basePrice"],
        base_ingredients=payload["baseIngredients"],
        sections=payload["sections"],
        plate_id="croissant",
    )


@pytest.fixture
def make_menu(croissant: Plate) -> Callable[..., Menu]:
    """Build a menu holding the croissant unless plates are given."""

    def _make(
        menu_id: str = "menu-1",
        restaurant_id: str = "rest-1",
        plates: Optional[List[Plate]] = None,
    ) -> Menu:
        return Menu(
            id=menu_id,
            restaurant_id=restaurant_id,
            name="Breakfast",
            plates=[croissant] if plates is None else plates,
        )

    return _make


@pytest.fixture
def make_subscription() -> Callable[..., Subscription]:
    """Build a subscription on the weekly schedule (30.00 over three days).

    A schedule override without a billing override gets its billing
    recomputed.
    """

    def _make(status: SubscriptionStatus = SubscriptionStatus.ACTIVE, **overrides) -> Subscription:
        schedule = overrides.pop("schedule", None) or build_schedule(weekly_schedule_payload(), now=NOW)
        fields = dict(
            id="sub-1",
            subscription_number="SUB-1-ABCDEF",
            customer_id="cust-1",
            restaurant_id="rest-1",
            frequency=SubscriptionFrequency.WEEKLY,
            schedule=schedule,
            delivery_address=DeliveryAddress(
                id="addr-1", label="Home", address="1 Main St", city="Springfield", postal_code="12345"
            ),
            billing=BillingPolicy().compute(schedule, "weekly", NOW),
            payment_method="card",
            start_date=NOW,
            next_delivery_date=NOW,
            status=status,
        )
        fields.update(overrides)
        return Subscription(**fields)

    return _make


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """Build a pending order of two large croissants (10.98 + 5.99 fee + 0.88 tax)."""

    def _make(order_id: str = "order-1", **overrides) -> Order:
        fields = dict(
            id=order_id,
            order_number="ORD-1894006800000-abc123xyz",
            customer_id="cust-1",
            restaurant_id="rest-1",
            restaurant_name="Trattoria",
            delivery_address=DeliveryAddress(
                id="addr-1", label="Home", address="1 Main St", city="Springfield", postal_code="12345"
            ),
            items=[OrderItem(id="line-1", plate_id="croissant", plate_name="Croissant", price=Decimal("5.49"), quantity=2)],
            subtotal=Decimal("10.98"),
            delivery_fee=Decimal("5.99"),
            tax=Decimal("0.88"),
            total=Decimal("17.85"),
            payment_method="card",
            created_at=NOW,
            updated_at=NOW,
        )
        fields.update(overrides)
        return Order(**fields)

    return _make

@pytest.fixture(autouse=True)
def _reset_persistence_singleton() -> Iterator[None]:
    """Each test sees a fresh shared document store."""
    reset_document_store()
    yield
    reset_document_store()
