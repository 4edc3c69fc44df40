"""User domain entity.

Pure business logic, no framework dependencies.

The user record is the internal identity of record: the role stored here is
authoritative, and the lockout state embedded here is only ever changed
through the lockout policy in ``src.domain.value_objects.lockout_state``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole
from src.domain.value_objects.lockout_state import LockoutState
from src.domain.value_objects.session_metadata import ActiveSessionRef


@dataclass
class User:
    """User domain entity.

    Business Rules:
        - Exactly one user per identity provider subject id
        - Role defaults to buyer and is never taken from end-user input
        - Email verification is monotonic (never reverts)
        - A successful login clears the lockout state
        - Only ACTIVE accounts may authenticate

    Attributes:
        id: Internal user identifier.
        subject_id: Identity provider subject id (unique).
        email: Email address (unique).
        name: Display name.
        avatar_url: Avatar image URL.
        phone_number: Optional phone number.
        role: Authoritative role.
        account_status: Lifecycle status.
        status_reason: Why an administrator suspended or banned the account.
        failed_login_attempts: Consecutive failed logins.
        locked_until: Lock deadline, None when not locked.
        login_count: Number of successful logins.
        last_login: Timestamp of the last successful login.
        last_login_ip: Client IP of the last successful login.
        last_login_location: Human-readable location of the last login.
        email_verified_at: When the email first became verified.
        is_phone_verified: Phone verification flag.
        active_sessions: Lightweight references to open sessions.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    Example:
        >>> user = User(id=uuid7(), subject_id="abc", email="a@example.com", ...)
        >>> user.is_email_verified
        False
        >>> user.mark_email_verified(datetime.now(UTC))
        >>> user.is_email_verified
        True
    """

    id: UUID
    subject_id: str
    email: str
    name: str
    created_at: datetime
    updated_at: datetime
    avatar_url: str | None = None
    phone_number: str | None = None
    role: UserRole = UserRole.BUYER
    account_status: AccountStatus = AccountStatus.ACTIVE
    status_reason: str | None = None

    # Lockout state
    failed_login_attempts: int = 0
    locked_until: datetime | None = None

    # Login tracking
    login_count: int = 0
    last_login: datetime | None = None
    last_login_ip: str | None = None
    last_login_location: str | None = None

    # Verification
    email_verified_at: datetime | None = None
    is_phone_verified: bool = False

    active_sessions: list[ActiveSessionRef] = field(default_factory=list)

    @property
    def is_email_verified(self) -> bool:
        """Whether the email address has been verified."""
        return self.email_verified_at is not None

    @property
    def lockout_state(self) -> LockoutState:
        """Embedded lockout state as a value object."""
        return LockoutState(
            failed_login_attempts=self.failed_login_attempts,
            locked_until=self.locked_until,
        )

    def apply_lockout_state(self, state: LockoutState) -> None:
        """Store a lockout state produced by the lockout policy.

        Args:
            state: New lockout state.
        """
        self.failed_login_attempts = state.failed_login_attempts
        self.locked_until = state.locked_until

    def is_active(self) -> bool:
        """Whether the account status allows authentication."""
        return self.account_status == AccountStatus.ACTIVE

    def change_status(
        self, status: AccountStatus, reason: str | None, now: datetime
    ) -> bool:
        """Move the account to ``status``.

        Reactivation drops the stored reason. Returns False, leaving the
        user untouched, when the status is unchanged.
        """
        if status == self.account_status:
            return False
        self.account_status = status
        self.status_reason = None if status == AccountStatus.ACTIVE else reason
        self.updated_at = now
        return True

    def mark_email_verified(self, now: datetime) -> None:
        """Stamp email verification the first time only.

        Args:
            now: Current time (UTC).
        """
        if self.email_verified_at is None:
            self.email_verified_at = now

    def update_display_fields(self, name: str | None, avatar_url: str | None) -> bool:
        """Refresh denormalised display fields from identity claims.

        A field is only overwritten when the incoming value is non-empty and
        differs from the stored one.

        Args:
            name: Incoming display name.
            avatar_url: Incoming avatar URL.

        Returns:
            bool: True if anything changed.
        """
        changed = False
        if name and name != self.name:
            self.name = name
            changed = True
        if avatar_url and avatar_url != self.avatar_url:
            self.avatar_url = avatar_url
            changed = True
        return changed

    def record_successful_login(
        self,
        now: datetime,
        *,
        ip_address: str | None = None,
        location: str | None = None,
    ) -> None:
        """Apply the bookkeeping of a successful login.

        Side Effects:
            - Increments login_count and stamps last_login
            - Records last_login_ip / last_login_location when provided
            - Clears failed_login_attempts and locked_until
        """
        self.login_count += 1
        self.last_login = now
        if ip_address:
            self.last_login_ip = ip_address
        if location:
            self.last_login_location = location
        self.apply_lockout_state(LockoutState.cleared())

    def upsert_session_ref(self, ref: ActiveSessionRef) -> None:
        """Add or replace the reference for ``ref.session_id``."""
        self.active_sessions = [
            existing
            for existing in self.active_sessions
            if existing.session_id != ref.session_id
        ]
        self.active_sessions.append(ref)

    def remove_session_ref(self, session_id: UUID) -> None:
        """Drop the reference for ``session_id`` if present."""
        self.active_sessions = [
            ref for ref in self.active_sessions if ref.session_id != session_id
        ]

    def clear_session_refs(self) -> None:
        """Drop all session references."""
        self.active_sessions = []
