"""Event bus protocol (port) for domain events.

Publishers are the command handlers; subscribers are infrastructure event
handlers (structured logging). Publishing is fail-open: a subscriber failure
never reaches the publisher.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.domain.events.base_event import DomainEvent

# Handlers are registered per concrete event type, so they may narrow the
# parameter to that subclass.
EventHandler = Callable[[Any], Awaitable[None]]


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Methods:
        subscribe: Register an async handler for an event type
        publish: Deliver an event to all handlers of its exact type
    """

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """Register ``handler`` for ``event_type`` (exact type match)."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish ``event``. Never raises."""
        ...
