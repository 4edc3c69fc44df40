"""Common error classes shared across layers.

Error Types:
- ValidationError: Input validation failures
- NotFoundError: Resource not found
- AuthenticationError: Caller identity could not be established
- AuthorizationError: Caller is known but not allowed

Usage:
    from src.core.errors import NotFoundError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.SESSION_NOT_FOUND,
        message="Session not found",
        resource_type="Session",
        resource_id=str(session_id),
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Session).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Caller identity could not be established (credential problems)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Caller identity is known but the action is not permitted.

    Attributes:
        required_permission: Role or permission that was required.
    """

    required_permission: str | None = None
