"""Authentication domain errors.

Typed failures produced while establishing who the caller is. They travel as
data inside ``Failure`` values and are mapped to HTTP status/code pairs by the
presentation layer.

Usage:
    from src.domain.errors import TokenVerificationError
    from src.domain.enums import VerificationFailure

    return Failure(error=TokenVerificationError.from_kind(VerificationFailure.EXPIRED))
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, AuthorizationError
from src.domain.enums.verification_failure import VerificationFailure

_KIND_TO_CODE: dict[VerificationFailure, ErrorCode] = {
    VerificationFailure.EXPIRED: ErrorCode.TOKEN_EXPIRED,
    VerificationFailure.REVOKED: ErrorCode.TOKEN_REVOKED,
    VerificationFailure.MALFORMED: ErrorCode.INVALID_TOKEN,
    VerificationFailure.UNKNOWN: ErrorCode.INVALID_TOKEN,
}

_KIND_TO_MESSAGE: dict[VerificationFailure, str] = {
    VerificationFailure.EXPIRED: "Token has expired. Please sign in again.",
    VerificationFailure.REVOKED: "Token has been revoked. Please sign in again.",
    VerificationFailure.MALFORMED: "Invalid authentication token.",
    VerificationFailure.UNKNOWN: "Token could not be verified. Please retry.",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenVerificationError(AuthenticationError):
    """Bearer credential rejected by the identity provider.

    Attributes:
        kind: Failure taxonomy entry (expired, revoked, malformed, unknown).
    """

    kind: VerificationFailure

    @classmethod
    def from_kind(cls, kind: VerificationFailure) -> "TokenVerificationError":
        """Build the error for a failure kind with its canonical code/message."""
        return cls(code=_KIND_TO_CODE[kind], message=_KIND_TO_MESSAGE[kind], kind=kind)

    @property
    def retryable(self) -> bool:
        """Only UNKNOWN failures (timeouts, provider outages) are worth retrying."""
        return self.kind == VerificationFailure.UNKNOWN


@dataclass(frozen=True, slots=True, kw_only=True)
class MissingTokenError(AuthenticationError):
    """No bearer credential was supplied."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessDeniedError(AuthorizationError):
    """Policy rejection for a known identity.

    Used for unverified email and non-active accounts.

    Attributes:
        account_status: Echoed account status when the account is not active.
    """

    account_status: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AccountLockedError(AuthorizationError):
    """Account temporarily locked after repeated failed logins.

    Attributes:
        retry_after_minutes: Whole minutes until the lock lifts. The raw
            deadline is never exposed.
    """

    retry_after_minutes: int = 0
