"""Session domain entity for multi-device session management.

Pure business logic, no framework dependencies.

A session represents one device's authenticated presence. There is at most
one active session per (user, device fingerprint); a second login from the
same device refreshes the existing row instead of creating another.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.enums.login_method import LoginMethod
from src.domain.value_objects.session_metadata import (
    ActiveSessionRef,
    DeviceDescriptor,
    LocationDescriptor,
)

DEFAULT_SESSION_TTL = timedelta(days=30)
DEFAULT_IDLE_TIMEOUT = timedelta(hours=24)


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity with device and location tracking.

    Business Rules:
        - expires_at is fixed at creation (created_at + TTL) and is a hard
          cutoff independent of activity
        - A session idle for longer than the idle timeout is force-expired
        - is_active=False is terminal; a deactivated session is never revived

    Attributes:
        id: Session identifier.
        user_id: Owning user.
        subject_id: Identity provider subject id (denormalised).
        device: Device descriptor (fingerprint, type, user agent...).
        location: Location descriptor (IP and optional geo fields).
        login_method: How the user signed in.
        is_active: Whether the session is still open.
        is_trusted: Whether the user marked this device as trusted.
        created_at: Creation timestamp.
        last_activity: Last recorded activity.
        expires_at: Hard expiry.
        logged_out_at: When the session was deactivated.
        revoked_reason: Why the session was deactivated.

    Example:
        >>> session = Session.open(
        ...     user_id=uuid7(),
        ...     subject_id="abc",
        ...     device=DeviceDescriptor(fingerprint="Mozilla/5.0 ..."),
        ...     location=LocationDescriptor(ip_address="203.0.113.7"),
        ...     login_method=LoginMethod.PASSWORD,
        ...     now=datetime.now(UTC),
        ... )
        >>> session.is_active
        True
    """

    id: UUID
    user_id: UUID
    subject_id: str
    device: DeviceDescriptor
    location: LocationDescriptor = field(default_factory=LocationDescriptor)
    login_method: LoginMethod = LoginMethod.PASSWORD
    is_active: bool = True
    is_trusted: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_activity: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime = field(
        default_factory=lambda: datetime.now(UTC) + DEFAULT_SESSION_TTL
    )
    logged_out_at: datetime | None = None
    revoked_reason: str | None = None

    @classmethod
    def open(
        cls,
        *,
        user_id: UUID,
        subject_id: str,
        device: DeviceDescriptor,
        location: LocationDescriptor,
        login_method: LoginMethod,
        now: datetime,
        ttl: timedelta = DEFAULT_SESSION_TTL,
    ) -> "Session":
        """Create a new active session expiring ``ttl`` after ``now``."""
        return cls(
            id=uuid7(),
            user_id=user_id,
            subject_id=subject_id,
            device=device,
            location=location,
            login_method=login_method,
            created_at=now,
            last_activity=now,
            expires_at=now + ttl,
        )

    def is_expired(self, now: datetime) -> bool:
        """Whether the hard TTL has passed."""
        return now >= self.expires_at

    def is_idle(self, now: datetime, idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT) -> bool:
        """Whether the session has been idle longer than ``idle_timeout``."""
        return now - self.last_activity > idle_timeout

    def is_usable(self, now: datetime) -> bool:
        """Active and within its hard TTL."""
        return self.is_active and not self.is_expired(now)

    def touch(self, now: datetime, location: LocationDescriptor | None = None) -> None:
        """Record activity, optionally refreshing the location.

        Args:
            now: Current time (UTC).
            location: New location; ignored when None or without an IP.
        """
        self.last_activity = now
        if location is not None and location.ip_address:
            self.location = location

    def deactivate(self, now: datetime, reason: str) -> bool:
        """Mark the session inactive.

        Args:
            now: Current time (UTC).
            reason: Why the session ended ("user_logout", "idle_timeout"...).

        Returns:
            bool: False if the session was already inactive (no change).
        """
        if not self.is_active:
            return False
        self.is_active = False
        self.logged_out_at = now
        self.revoked_reason = reason
        return True

    def mark_trusted(self) -> None:
        """Flag the device as trusted by its owner."""
        self.is_trusted = True

    def to_ref(self) -> ActiveSessionRef:
        """Lightweight reference stored on the user record."""
        return ActiveSessionRef(
            session_id=self.id,
            device_type=self.device.device_type,
            last_activity=self.last_activity,
        )
