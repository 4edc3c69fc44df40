"""Account lockout state and policy.

Pure decision logic over the failed-attempt counter and lock-until timestamp
embedded in every user record. Nothing here touches storage or the clock: the
caller passes ``now`` and persists the returned state.

State machine:
    Clear --failure (count < threshold)--> Counting
    Counting --failure (count reaches threshold)--> Locked(until = now + duration)
    Locked --is_locked after until--> Clear (auto-unlock on read)
    Locked --failure after until--> Counting(1)
    any --successful login--> Clear

Usage:
    from src.domain.value_objects.lockout_state import (
        LockoutState, is_locked, record_failure,
    )

    state = record_failure(user.lockout_state, now)
    locked, state = is_locked(state, now)
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta

DEFAULT_LOCKOUT_THRESHOLD = 5
DEFAULT_LOCKOUT_DURATION = timedelta(minutes=15)


@dataclass(frozen=True, slots=True, kw_only=True)
class LockoutState:
    """Failed-login counter and lock deadline (value object).

    Attributes:
        failed_login_attempts: Consecutive failures since the last success or
            unlock. Never negative.
        locked_until: Lock deadline (UTC). None when not locked.

    Raises:
        ValueError: If failed_login_attempts is negative.
    """

    failed_login_attempts: int = 0
    locked_until: datetime | None = None

    def __post_init__(self) -> None:
        """Validate counter."""
        if self.failed_login_attempts < 0:
            raise ValueError("failed_login_attempts cannot be negative")

    def lock_expired(self, now: datetime) -> bool:
        """Whether a lock was set and its deadline has passed."""
        return self.locked_until is not None and self.locked_until <= now

    @classmethod
    def cleared(cls) -> "LockoutState":
        """State after a successful login or an auto-unlock."""
        return cls()


def record_failure(
    state: LockoutState,
    now: datetime,
    *,
    threshold: int = DEFAULT_LOCKOUT_THRESHOLD,
    duration: timedelta = DEFAULT_LOCKOUT_DURATION,
) -> LockoutState:
    """Record one failed login attempt.

    Business Rules:
        - Reaching ``threshold`` failures sets ``locked_until = now + duration``.
        - A failure arriving after a lock has expired restarts counting at 1
          rather than continuing from the stale count.
        - Failures during an active lock are counted but do not extend it.

    Args:
        state: Current lockout state.
        now: Current time (UTC).
        threshold: Failures that trigger a lock.
        duration: Lock length.

    Returns:
        New LockoutState.
    """
    if state.lock_expired(now):
        state = LockoutState.cleared()

    attempts = state.failed_login_attempts + 1

    if state.locked_until is not None:
        # Already locked and still in force
        return replace(state, failed_login_attempts=attempts)

    if attempts >= threshold:
        return LockoutState(failed_login_attempts=attempts, locked_until=now + duration)

    return LockoutState(failed_login_attempts=attempts, locked_until=None)


def is_locked(state: LockoutState, now: datetime) -> tuple[bool, LockoutState]:
    """Check whether the account is locked at ``now``.

    An expired lock is cleared as part of the check: both the deadline and
    the counter are reset, and the caller is expected to persist the returned
    state.

    Args:
        state: Current lockout state.
        now: Current time (UTC).

    Returns:
        Tuple of (locked, possibly-cleared state).
    """
    if state.locked_until is None:
        return False, state
    if state.locked_until > now:
        return True, state
    return False, LockoutState.cleared()


def minutes_remaining(state: LockoutState, now: datetime) -> int:
    """Whole minutes (rounded up, at least 1) until the lock lifts.

    Used for "try again in N minutes" messages so the raw deadline is never
    exposed.
    """
    if state.locked_until is None or state.locked_until <= now:
        return 0
    seconds = (state.locked_until - now).total_seconds()
    return max(1, int(-(-seconds // 60)))
