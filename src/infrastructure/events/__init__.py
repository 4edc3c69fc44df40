"""Infrastructure event implementations.

Event Bus:
    - InMemoryEventBus: In-process event bus with fail-open behavior

Event Handlers:
    - LoggingEventHandler: Structured logging for all domain events

Usage:
    >>> event_bus = InMemoryEventBus(logger=logger)
    >>> LoggingEventHandler(logger=logger).register(event_bus)
"""

from src.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = [
    "InMemoryEventBus",
]
