"""User database model for the identity core.

This module defines the User model: the internal identity of record that each
identity provider subject is reconciled onto.

Security:
    - role: Authoritative role; never written from end-user input
    - failed_login_attempts / locked_until: Embedded lockout state
    - account_status: Only ACTIVE accounts may authenticate

Session Management:
    - active_sessions: Lightweight JSON references to open sessions (the
      user_sessions table is the source of truth)
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel
from src.infrastructure.persistence.types import UTCDateTime


class User(BaseMutableModel):
    """User model for identity reconciliation and account state.

    Fields:
        id: UUID primary key (from BaseMutableModel)
        created_at: Timestamp when user was first reconciled (from BaseMutableModel)
        updated_at: Timestamp when user last updated (from BaseMutableModel)
        subject_id: Identity provider subject id (unique)
        email: Unique email address (lowercase)
        name: Display name
        avatar_url: Avatar image URL
        phone_number: Optional phone number
        role: buyer, seller or admin
        account_status: active, suspended or banned
        status_reason: Administrator reason for a suspension or ban
        failed_login_attempts: Counter for failed logins (resets on success)
        locked_until: Timestamp until which account is locked (nullable)
        login_count: Number of successful logins
        last_login: Last successful login
        last_login_ip: Client IP of the last successful login
        last_login_location: Location label of the last successful login
        email_verified_at: First time the email was seen verified
        is_phone_verified: Phone verification flag
        active_sessions: JSON list of {session_id, device_type, last_activity}

    Indexes:
        - ix_users_subject_id: unique, reconciliation lookups
        - ix_users_email: unique, reconciliation and failed-login lookups
    """

    __tablename__ = "users"

    # =========================================================================
    # Identity
    # =========================================================================

    subject_id: Mapped[str] = mapped_column(
        String(128),
        unique=True,
        index=True,
        nullable=False,
        comment="Identity provider subject id",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (lowercase)",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    avatar_url: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        default=None,
        comment="Avatar image URL",
    )

    phone_number: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        default=None,
        comment="Phone number",
    )

    # =========================================================================
    # Authorization
    # =========================================================================

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="buyer",
        comment="Authoritative role (buyer, seller, admin)",
    )

    account_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
        comment="Account lifecycle status (active, suspended, banned)",
    )
    status_reason: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
        comment="Administrator reason for a suspension or ban",
    )

    # =========================================================================
    # Lockout
    # =========================================================================

    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Consecutive failed logins",
    )

    locked_until: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="Account locked until this time",
    )

    # =========================================================================
    # Login tracking
    # =========================================================================

    login_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of successful logins",
    )

    last_login: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="Last successful login",
    )

    last_login_ip: Mapped[str | None] = mapped_column(
        String(45),
        nullable=True,
        default=None,
        comment="Client IP of the last successful login",
    )

    last_login_location: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        comment="Location label of the last successful login",
    )

    # =========================================================================
    # Verification
    # =========================================================================

    email_verified_at: Mapped[datetime | None] = mapped_column(
        UTCDateTime,
        nullable=True,
        default=None,
        comment="When the email was first seen verified",
    )

    is_phone_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Phone verification flag",
    )

    # =========================================================================
    # Sessions
    # =========================================================================

    active_sessions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Lightweight references to open sessions",
    )
