"""Authentication DTOs (Data Transfer Objects).

Response/result dataclasses for authentication command handlers.
These carry data from handlers back to the presentation layer.

DTOs:
    - AuthenticatedIdentity: Result from AuthenticateRequest command
    - ReconciliationResult: Result from ReconcileIdentity command
    - LoginResult: Result from Login command
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.entities.session import Session
from src.domain.entities.user import User
from src.domain.enums.user_role import UserRole
from src.domain.value_objects.claims import ValidatedClaimSet


@dataclass(frozen=True, kw_only=True)
class AuthenticatedIdentity:
    """Identity attached to an authenticated request.

    The role is read from the stored user when one exists, otherwise it is
    the default buyer role. Claims are never trusted for the role.

    Attributes:
        subject_id: Identity provider subject id.
        email: Email address.
        name: Display name.
        avatar_url: Avatar URL.
        role: Authoritative role.
        user_id: Internal user id, None before the first login.
        claims: The verified claim set (for login reconciliation).
    """

    subject_id: str
    email: str | None
    name: str | None
    avatar_url: str | None
    role: UserRole
    user_id: UUID | None = None
    claims: ValidatedClaimSet | None = None


@dataclass(frozen=True, kw_only=True)
class ReconciliationResult:
    """Response from identity reconciliation.

    Attributes:
        user: The reconciled user (carries the authoritative role).
        is_new_user: True iff this call created the record.
    """

    user: User
    is_new_user: bool


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Response from a successful login.

    Attributes:
        user: The reconciled user.
        session: Session opened or refreshed for the device.
        is_new_user: True iff the login created the user record.
    """

    user: User
    session: Session
    is_new_user: bool
