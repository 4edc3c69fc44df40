"""Session domain events."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionCreated(DomainEvent):
    """Emitted when a login opens a session for a new device.

    Attributes:
        session_id: The new session's id.
        user_id: Owning user.
        device_info: Parsed device label ("Chrome on Mac OS X").
        ip_address: Client IP address.
        location: Geographic location label.
    """

    session_id: UUID
    user_id: UUID
    device_info: str | None = None
    ip_address: str | None = None
    location: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionRevoked(DomainEvent):
    """Emitted when a single session is revoked.

    Attributes:
        session_id: The revoked session's id.
        user_id: Owning user.
        reason: Why the session was revoked.
    """

    session_id: UUID
    user_id: UUID
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class AllSessionsRevoked(DomainEvent):
    """Emitted when every session of a user is revoked.

    Attributes:
        user_id: Owning user.
        session_count: Number of sessions that were active.
        reason: Why the sessions were revoked.
    """

    user_id: UUID
    session_count: int
    reason: str


@dataclass(frozen=True, kw_only=True, slots=True)
class SessionIdleExpired(DomainEvent):
    """Emitted when a session is force-expired after the idle timeout.

    Attributes:
        session_id: Expired session.
        user_id: Owning user.
    """

    session_id: UUID
    user_id: UUID
