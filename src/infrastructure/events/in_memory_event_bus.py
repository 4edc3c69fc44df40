"""In-memory event bus implementation.

Implements EventBusProtocol with a dictionary-based handler registry. Events
stay inside the process; the only subscriber today is the structured logging
handler.

Architecture:
    - Implements EventBusProtocol (hexagonal adapter pattern)
    - Registry keyed by exact event type (event_type -> list of handlers)
    - Fail-open: a handler failure is logged, never raised to the publisher
    - Handlers for one event run concurrently (asyncio.gather)

Usage:
    >>> bus = InMemoryEventBus(logger=logger)
    >>> bus.subscribe(SessionRevoked, logging_handler.handle_session_revoked)
    >>> await bus.publish(SessionRevoked(session_id=sid, user_id=uid, reason="user_logout"))
"""

import asyncio
from collections import defaultdict

from src.domain.events.base_event import DomainEvent
from src.domain.protocols.event_bus_protocol import EventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """In-memory event bus with fail-open behavior.

    Not thread-safe; designed for a single asyncio event loop.

    Attributes:
        _handlers: Event class -> registered async handlers.
        _logger: Logger for publishing traces and handler failures.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        """Initialize event bus with logger.

        Args:
            logger: Logger for handler failures (warning) and publishing (debug).
        """
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register event handler for specific event type.

        Args:
            event_type: Class of event to handle. Subclasses are not matched.
            handler: Async callable taking the event.
        """
        self._handlers[event_type].append(handler)

    def handler_count(self, event_type: type[DomainEvent]) -> int:
        """Number of handlers registered for ``event_type``."""
        return len(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all registered handlers.

        Flow:
            1. Look up handlers for type(event)
            2. No handlers: no-op
            3. Run handlers with asyncio.gather(return_exceptions=True)
            4. Log each handler exception at warning level

        Args:
            event: Domain event to deliver.
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=event_type.__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        results = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results, strict=True):
            if isinstance(result, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_type.__name__,
                    event_id=str(event.event_id),
                    handler_name=getattr(handler, "__name__", repr(handler)),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
