"""Authentication commands (CQRS write operations).

Commands represent intent to change identity state. All commands are immutable
(frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types (Success/Failure)
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole
from src.domain.value_objects.claims import ValidatedClaimSet


@dataclass(frozen=True, kw_only=True)
class AuthenticateRequest:
    """Authenticate an inbound request from its bearer credential.

    Runs the verification state machine: token present, verified, email
    check, lock check, account status check.

    Attributes:
        credential: Raw bearer token, None or empty when absent.
        ip_address: Client IP (logging only).

    Example:
        >>> command = AuthenticateRequest(credential="eyJhbGciOi...")
        >>> result = await handler.handle(command)
    """

    credential: str | None
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class ReconcileIdentity:
    """Map a verified claim set onto exactly one internal user record.

    Attributes:
        claims: Verified identity claims.
        name_hint: Display name supplied by the client (used on creation only).
        role_hint: Requested role. Honoured only when ``trusted`` is True.
        trusted: Whether the caller is an internal trusted path.
        ip_address: Client IP address recorded as last_login_ip.

    Example:
        >>> command = ReconcileIdentity(
        ...     claims=claims,
        ...     name_hint="Ada Lovelace",
        ...     ip_address="203.0.113.7",
        ... )
        >>> result = await handler.handle(command)
    """

    claims: ValidatedClaimSet
    name_hint: str | None = None
    role_hint: UserRole | None = None
    trusted: bool = False
    ip_address: str | None = None


@dataclass(frozen=True, kw_only=True)
class RecordFailedLogin:
    """Record a failed sign-in attempt against an account.

    Attributes:
        email: Email the sign-in was attempted for.
        ip_address: Client IP address.
        reason: Failure reason reported by the client.
    """

    email: str
    ip_address: str | None = None
    reason: str = "invalid_credentials"


@dataclass(frozen=True, kw_only=True)
class ChangeUserRole:
    """Change a user's authoritative role (administrator action).

    Attributes:
        user_id: User whose role changes.
        role: New role.
        changed_by: Subject id of the administrator.
    """

    user_id: UUID
    role: UserRole
    changed_by: str


@dataclass(frozen=True, kw_only=True)
class ChangeAccountStatus:
    """Suspend, ban or reactivate a user (administrator action).

    Leaving ACTIVE ends every open session of the user.

    Attributes:
        user_id: User whose status changes.
        status: New account status.
        changed_by: Subject id of the administrator.
        reason: Why the account is suspended or banned.
    """

    user_id: UUID
    status: AccountStatus
    changed_by: str
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class Login:
    """Sign a user in from a bearer credential.

    Authenticates the credential, reconciles the identity and opens or
    refreshes the device session. Client hints never raise the role.

    Attributes:
        credential: Raw bearer token.
        name_hint: Display name supplied by the client.
        role_hint: Role requested by the client (logged and ignored).
        ip_address: Client IP address.
        user_agent: Full User-Agent header.
        device_fingerprint: Bounded User-Agent prefix.
    """

    credential: str | None
    name_hint: str | None = None
    role_hint: UserRole | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    device_fingerprint: str = ""
