"""Result types for railway-oriented programming.

Operations that can fail for expected reasons (an expired credential, a locked
account, a missing session) return a Result instead of raising. Callers match
on the outcome and are forced to handle every failure branch.

Usage:
    def check_lock(state: LockoutState, now: datetime) -> Result[LockoutState, str]:
        locked, state = is_locked(state, now)
        if locked:
            return Failure(error="account_locked")
        return Success(value=state)

    match check_lock(user.lockout_state, datetime.now(UTC)):
        case Success(value=state):
            ...
        case Failure(error=reason):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: Payload produced by the operation.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: Typed error (usually a DomainError subclass).
    """

    error: E


Result = Success[T] | Failure[E]
