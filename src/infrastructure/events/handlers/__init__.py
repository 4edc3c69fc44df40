"""Event handlers reacting to domain events with infrastructure side effects."""

from src.infrastructure.events.handlers.logging_event_handler import LoggingEventHandler

__all__ = [
    "LoggingEventHandler",
]
