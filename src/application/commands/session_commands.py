"""Session management commands (CQRS write operations).

Commands represent user intent to change session state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Commands don't return values (handlers return Result types)
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.login_method import LoginMethod


@dataclass(frozen=True, kw_only=True)
class OpenOrRefreshSession:
    """Open a session for a device, or refresh the one already open.

    Called during login. Sessions are keyed by (user, device fingerprint).

    Attributes:
        user_id: User identifier.
        subject_id: Identity provider subject id.
        device_fingerprint: Bounded User-Agent prefix.
        user_agent: Full User-Agent header (for device parsing).
        ip_address: Client IP address (for geolocation).
        login_method: How the user signed in.

    Example:
        >>> command = OpenOrRefreshSession(
        ...     user_id=UUID("123e4567-e89b-12d3-a456-426614174000"),
        ...     subject_id="abc",
        ...     device_fingerprint="Mozilla/5.0...",
        ...     user_agent="Mozilla/5.0...",
        ...     ip_address="192.168.1.1",
        ...     login_method=LoginMethod.GOOGLE,
        ... )
        >>> result = await handler.handle(command)
    """

    user_id: UUID
    subject_id: str
    device_fingerprint: str
    user_agent: str | None = None
    ip_address: str | None = None
    login_method: LoginMethod = LoginMethod.PASSWORD


@dataclass(frozen=True, kw_only=True)
class ValidateSessionActivity:
    """Check the caller's device session for idleness and record activity.

    Attributes:
        user_id: User identifier.
        device_fingerprint: Bounded User-Agent prefix of the request.
    """

    user_id: UUID
    device_fingerprint: str


@dataclass(frozen=True, kw_only=True)
class RevokeSession:
    """Revoke a specific session.

    Called on logout or when user manually revokes a session.
    Soft-deletes session (marks inactive, keeps the row).

    Attributes:
        session_id: Session identifier to revoke.
        user_id: User identifier (for ownership check).
        reason: Revocation reason (user_logout, manual...).

    Example:
        >>> command = RevokeSession(
        ...     session_id=UUID("abc123..."),
        ...     user_id=UUID("123e4567..."),
        ...     reason="user_logout",
        ... )
        >>> result = await handler.handle(command)
    """

    session_id: UUID
    user_id: UUID
    reason: str = "user_logout"


@dataclass(frozen=True, kw_only=True)
class RevokeAllUserSessions:
    """Revoke all sessions for a user ("log out everywhere").

    Attributes:
        user_id: User identifier.
        reason: Revocation reason.
    """

    user_id: UUID
    reason: str = "logout_all"


@dataclass(frozen=True, kw_only=True)
class SweepIdleSessions:
    """Inactivate a user's sessions that exceeded the idle timeout.

    Attributes:
        user_id: User identifier.
    """

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class TrustSessionDevice:
    """Mark the device behind a session as trusted by its owner.

    Attributes:
        session_id: Session identifier.
        user_id: User identifier (for ownership check).
    """

    session_id: UUID
    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class PurgeExpiredSessions:
    """Physically delete every session past its hard expiry."""

    pass
