"""In-memory event bus.

Implements the IEventBus port. Handlers registered for a base event class
also receive its subclasses, so subscribing to DomainEvent observes
everything the application publishes.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

from domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent)
Handler = Callable[[Any], Awaitable[None]]


class InMemoryEventBus:
    """
    Dictionary-backed IEventBus.

    Handlers run sequentially in the order: most specific event class
    first, then base classes; within a class, subscription order. A failing
    handler is logged and does not stop the others.

    Example:
        >>> bus = InMemoryEventBus()
        >>> async def audit(event: DomainEvent) -> None:
        ...     print(type(event).__name__)
        >>> bus.subscribe(DomainEvent, audit)
        >>> await bus.publish(PlateDeleted.create("menu-1", "plate-1"))
        PlateDeleted
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

        logger.debug(
            "Handler subscribed",
            extra={
                "event_type": event_type.__name__,
                "handler": getattr(handler, "__name__", repr(handler)),
            },
        )

    def _handlers_for(self, event_type: Type[DomainEvent]) -> List[Handler]:
        handlers: List[Handler] = []
        for klass in event_type.__mro__:
            handlers.extend(self._handlers.get(klass, []))
        return handlers

    async def publish(self, event: TEvent) -> None:
        """
        Deliver an event to every matching handler.

        Handler exceptions are logged with traceback and not re-raised:
        events are published after the write committed, so a handler
        failure cannot undo it.
        """
        event_type = type(event)
        handlers = self._handlers_for(event_type)

        if not handlers:
            logger.debug(
                "No handlers for event",
                extra={"event_type": event_type.__name__},
            )
            return

        logger.info(
            "Publishing event",
            extra={
                "event_type": event_type.__name__,
                "event_id": str(event.event_id),
                "handler_count": len(handlers),
            },
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event_type.__name__,
                        "event_id": str(event.event_id),
                        "handler": getattr(handler, "__name__", repr(handler)),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> bool:
        """Remove the first registration of handler. Returns False if absent."""
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def clear(self) -> None:
        self._handlers.clear()

    def get_handler_count(self, event_type: Type[TEvent]) -> int:
        """Number of handlers an event of this type would reach."""
        return len(self._handlers_for(event_type))
