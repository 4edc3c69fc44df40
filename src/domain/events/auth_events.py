"""Authentication domain events.

Login outcomes, lockouts and role changes. Consumed by the logging event
handler; subscribers must never affect the outcome of the login itself.
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.events.base_event import DomainEvent


@dataclass(frozen=True, kw_only=True, slots=True)
class UserLoginSucceeded(DomainEvent):
    """Emitted after reconciliation and session bookkeeping succeed.

    Attributes:
        user_id: Internal user id.
        subject_id: Identity provider subject id.
        is_new_user: Whether this login created the user record.
        session_id: Session opened or refreshed by the login.
        ip_address: Client IP address.
    """

    user_id: UUID
    subject_id: str
    is_new_user: bool
    session_id: UUID | None = None
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class UserLoginFailed(DomainEvent):
    """Emitted when a login is rejected.

    Attributes:
        reason: Machine-readable rejection code.
        subject_id: Subject id when the credential was verified.
        email: Email when known.
        ip_address: Client IP address.
    """

    reason: str
    subject_id: str | None = None
    email: str | None = None
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True, slots=True)
class UserAccountLocked(DomainEvent):
    """Emitted when a failed attempt pushes the account into lockout.

    Attributes:
        user_id: Internal user id.
        failed_login_attempts: Counter value that triggered the lock.
    """

    user_id: UUID
    failed_login_attempts: int


@dataclass(frozen=True, kw_only=True, slots=True)
class UserRoleChanged(DomainEvent):
    """Emitted when an administrator changes a user's role.

    Attributes:
        user_id: User whose role changed.
        previous_role: Role before the change.
        new_role: Role after the change.
        changed_by: Subject id of the administrator.
    """

    user_id: UUID
    previous_role: str
    new_role: str
    changed_by: str


@dataclass(frozen=True, kw_only=True, slots=True)
class UserAccountStatusChanged(DomainEvent):
    """Emitted when an administrator suspends, bans or reactivates a user.

    Attributes:
        user_id: User whose status changed.
        previous_status: Status before the change.
        new_status: Status after the change.
        changed_by: Subject id of the administrator.
        reason: Administrator's reason, if given.
        revoked_count: Sessions ended because the account left ACTIVE.
    """

    user_id: UUID
    previous_status: str
    new_status: str
    changed_by: str
    reason: str | None = None
    revoked_count: int = 0
