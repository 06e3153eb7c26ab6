"""Subscription aggregate root."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import List, Optional

from domain.shared.errors import InvalidStatusTransitionError, NotFoundError, ValidationFailedError
from domain.subscription.core.entities.day import SubscriptionDay
from domain.subscription.core.value_objects.billing import Billing
from domain.subscription.core.value_objects.delivery_address import DeliveryAddress
from domain.subscription.core.value_objects.enums import SubscriptionFrequency, SubscriptionStatus


@dataclass
class Subscription:
    """
    Aggregate Root: Recurring meal subscription of a customer to a restaurant.

    Status machine:
        pending → active
        active ⇄ paused
        active | paused → cancelled   (terminal)
        active → expired              (terminal, once end_date has passed)

    No transition touches the schedule. Resuming takes a freshly computed
    billing so next_billing_date restarts from the resume time.

    Identity: Defined by id (subscription_number is the human-facing code)
    """

    id: str
    subscription_number: str
    customer_id: str
    restaurant_id: str
    frequency: SubscriptionFrequency
    schedule: List[SubscriptionDay]
    delivery_address: DeliveryAddress
    billing: Billing
    payment_method: str
    start_date: datetime
    next_delivery_date: datetime
    status: SubscriptionStatus = SubscriptionStatus.PENDING
    end_date: Optional[datetime] = None
    paused_until: Optional[datetime] = None
    skipped_deliveries: List[date] = field(default_factory=list)
    last_delivered_at: Optional[datetime] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    restaurant_name: Optional[str] = None
    default_delivery_time: Optional[str] = None

    # Timestamps
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # ═══════════════════════════════════════════════════════════
    # STATUS MACHINE
    # ═══════════════════════════════════════════════════════════

    def activate(self) -> None:
        self._require_status("activate", SubscriptionStatus.PENDING)
        self.status = SubscriptionStatus.ACTIVE
        self.touch()

    def pause(self, until: Optional[datetime] = None) -> None:
        """Suspend deliveries, optionally until a given date."""
        self._require_status("pause", SubscriptionStatus.ACTIVE)
        self.status = SubscriptionStatus.PAUSED
        self.paused_until = until
        self.touch()

    def resume(self, billing: Billing) -> None:
        """
        Resume deliveries with a recomputed billing.

        Args:
            billing: Billing computed at resume time
        """
        self._require_status("resume", SubscriptionStatus.PAUSED)
        self.status = SubscriptionStatus.ACTIVE
        self.paused_until = None
        self.billing = billing
        self.touch()

    def cancel(self) -> None:
        self._require_status("cancel", SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED)
        self.status = SubscriptionStatus.CANCELLED
        self.touch()

    def expire(self, now: Optional[datetime] = None) -> None:
        """
        Expire an active subscription whose end date has passed.

        Raises:
            InvalidStatusTransitionError: If not active, or end_date not reached
        """
        self._require_status("expire", SubscriptionStatus.ACTIVE)
        now = now or datetime.now(timezone.utc)
        if self.end_date is None or self.end_date > now:
            raise InvalidStatusTransitionError(
                f"Subscription {self.id} cannot expire before its end date"
            )
        self.status = SubscriptionStatus.EXPIRED
        self.touch()

    def _require_status(self, action: str, *allowed: SubscriptionStatus) -> None:
        if self.status not in allowed:
            raise InvalidStatusTransitionError(
                f"Cannot {action} subscription {self.id} in status {self.status.value}"
            )

    # ═══════════════════════════════════════════════════════════
    # SCHEDULE
    # ═══════════════════════════════════════════════════════════

    def replace_schedule(self, schedule: List[SubscriptionDay], billing: Billing) -> None:
        """Install a rebuilt schedule together with the billing computed from it."""
        self._require_editable()
        self.schedule = schedule
        self.billing = billing
        self.touch()

    def skip_delivery(self, delivery_date: date) -> None:
        """Record a delivery date to skip (recorded once)."""
        self._require_editable()
        if delivery_date not in self.skipped_deliveries:
            self.skipped_deliveries.append(delivery_date)
            self.touch()

    def find_day(self, day_id: str) -> SubscriptionDay:
        """
        Raises:
            NotFoundError: If the schedule has no day with that id
        """
        for day in self.schedule:
            if day.id == day_id:
                return day
        raise NotFoundError(f"Day with id {day_id} not found in subscription {self.id}")

    def mark_delivered(self, delivered_at: datetime) -> None:
        self.last_delivered_at = delivered_at
        self.touch()

    def _require_editable(self) -> None:
        if self.status.is_terminal:
            raise ValidationFailedError(
                f"Subscription {self.id} is {self.status.value} and can no longer be changed"
            )

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
