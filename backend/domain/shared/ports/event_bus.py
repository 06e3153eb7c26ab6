"""Event bus port (interface).

Handlers publish domain events after a successful write; subscribers
(audit logs, notifications) react without the handler knowing them.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from domain.shared.events import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

# Event handler type: async function that takes an event and returns None
EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Interface for event publishing and subscription.

    Example usage (application layer):
        >>> async def on_status_changed(event: SubscriptionStatusChanged) -> None:
        ...     print(f"{event.subscription_id}: {event.new_status}")
        ...
        >>> event_bus.subscribe(SubscriptionStatusChanged, on_status_changed)
        >>> await event_bus.publish(event)
    """

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Async function to call when event is published
        """
        ...

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to the handlers of its class and of its bases.

        Called after the write that produced the event has committed;
        a failing handler never fails the command that published.
        """
        ...

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        ...

    def clear(self) -> None:
        """Clear all event subscriptions."""
        ...
