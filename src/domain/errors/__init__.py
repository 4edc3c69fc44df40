"""Domain errors package.

Usage:
    from src.domain.errors import TokenVerificationError, AccountLockedError
"""

from src.domain.errors.authentication_error import (
    AccessDeniedError,
    AccountLockedError,
    MissingTokenError,
    TokenVerificationError,
)
from src.domain.errors.session_error import SessionExpiredError

__all__ = [
    "AccessDeniedError",
    "AccountLockedError",
    "MissingTokenError",
    "SessionExpiredError",
    "TokenVerificationError",
]
