"""Session database model for multi-device session management.

One row per device session, with device and location metadata captured when
the session was opened.

Uniqueness:
    - At most one ACTIVE row per (user_id, device_fingerprint), enforced by a
      partial unique index. Concurrent same-device logins that both try to
      insert are folded into the surviving row by the repository.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, Float, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel
from src.infrastructure.persistence.types import UTCDateTime


class Session(BaseMutableModel):
    """Session model for multi-device session management.

    Session Lifecycle:
        1. Created on first login from a device (with device/location enrichment)
        2. Refreshed on later logins from the same device
        3. Activity tracked on requests through the session-activity dependency
        4. Deactivated on logout, revoke-all, or idle timeout (24 hours)
        5. Never active after expires_at (30 days); purged physically later

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when session created (from BaseMutableModel)
        updated_at: Timestamp when session last updated (from BaseMutableModel)

        Identity:
            user_id: Foreign key to users table (cascade delete)
            subject_id: Identity provider subject id (denormalised)

        Device Information:
            device_fingerprint: Bounded User-Agent prefix (dedup key)
            device_type: ios, android, web, desktop, mobile, tablet
            user_agent, browser, browser_version, os, os_version, device_model

        Network Information:
            ip_address, country, country_code, city, region, timezone,
            latitude, longitude

        Lifecycle:
            login_method, is_active, is_trusted, last_activity, expires_at,
            logged_out_at, revoked_reason

    Indexes:
        - ix_user_sessions_user_id: (user_id) for user's sessions
        - ix_user_sessions_expires_at: (expires_at) for purge queries
        - uq_user_sessions_active_device: unique (user_id, device_fingerprint)
          WHERE is_active
        - idx_user_sessions_user_active: (user_id, is_active, last_activity)
    """

    __tablename__ = "user_sessions"

    # =========================================================================
    # Identity
    # =========================================================================

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this session",
    )

    subject_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Identity provider subject id",
    )

    # =========================================================================
    # Device Information
    # =========================================================================

    device_fingerprint: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Bounded User-Agent prefix identifying the device",
    )

    device_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="web",
        comment="Coarse device class",
    )

    user_agent: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        comment="Full user agent string from HTTP header",
    )

    browser: Mapped[str | None] = mapped_column(
        String(100), nullable=True, default=None, comment="Browser family"
    )

    browser_version: Mapped[str | None] = mapped_column(
        String(50), nullable=True, default=None, comment="Browser version"
    )

    os: Mapped[str | None] = mapped_column(
        String(100), nullable=True, default=None, comment="Operating system family"
    )

    os_version: Mapped[str | None] = mapped_column(
        String(50), nullable=True, default=None, comment="Operating system version"
    )

    device_model: Mapped[str | None] = mapped_column(
        String(100), nullable=True, default=None, comment="Hardware model"
    )

    # =========================================================================
    # Network Information
    # =========================================================================

    ip_address: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        default=None,
        comment="Client IP address (IPv4 or IPv6)",
    )

    country: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    country_code: Mapped[str | None] = mapped_column(String(2), nullable=True, default=None)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True, default=None)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    login_method: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="password",
        comment="How the user signed in",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the session is open",
    )

    is_trusted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the owner marked this device as trusted",
    )

    last_activity: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="Timestamp of last user activity in this session",
    )

    expires_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        index=True,
        comment="Hard expiry (created_at + TTL)",
    )

    logged_out_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="When the session was deactivated",
    )

    revoked_reason: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        default=None,
        comment="Why the session was deactivated (user_logout, idle_timeout...)",
    )

    # =========================================================================
    # Composite Indexes
    # =========================================================================

    __table_args__ = (
        Index(
            "uq_user_sessions_active_device",
            "user_id",
            "device_fingerprint",
            unique=True,
            postgresql_where=text("is_active = true"),
            sqlite_where=text("is_active = 1"),
        ),
        Index(
            "idx_user_sessions_user_active",
            "user_id",
            "is_active",
            "last_activity",
        ),
    )

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Human-readable representation of session.
        """
        return (
            f"<Session("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"device_type={self.device_type!r}, "
            f"is_active={self.is_active}"
            f")>"
        )
