"""Base domain event class.

Domain events record things that happened in the identity core (a login
succeeded, a session was revoked). They are immutable, named in past tense and
published after the state change is persisted.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class SessionRevoked(DomainEvent):
    ...     session_id: UUID
    ...     user_id: UUID
    >>>
    >>> event = SessionRevoked(session_id=uuid7(), user_id=uuid7())
    >>> event.event_id  # Auto-generated
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier for this event instance (UUIDv7, so ids
            sort by creation time).
        occurred_at: When the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
