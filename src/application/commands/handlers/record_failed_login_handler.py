"""Record failed login handler.

Applies the lockout policy to one failed sign-in reported for an email.

Flow:
1. Find user by email (unknown email: nothing to record)
2. Re-read the lockout columns
3. Apply record_failure (threshold and duration from configuration)
4. Persist only the lockout columns
5. Publish UserLoginFailed, and UserAccountLocked when the lock engages

The caller never learns whether the email exists; the presentation layer
answers 202 either way.
"""

from datetime import UTC, datetime, timedelta

from src.application.commands.auth_commands import RecordFailedLogin
from src.core.result import Result, Success
from src.domain.events.auth_events import UserAccountLocked, UserLoginFailed
from src.domain.protocols import EventBusProtocol, LoggerProtocol, UserRepository
from src.domain.value_objects.lockout_state import (
    DEFAULT_LOCKOUT_DURATION,
    DEFAULT_LOCKOUT_THRESHOLD,
    LockoutState,
    record_failure,
)


class RecordFailedLoginHandler:
    """Handler for failed-login bookkeeping."""

    def __init__(
        self,
        user_repo: UserRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        threshold: int = DEFAULT_LOCKOUT_THRESHOLD,
        duration: timedelta = DEFAULT_LOCKOUT_DURATION,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            user_repo: User repository.
            event_bus: Event bus for publishing domain events.
            logger: Structured logger.
            threshold: Failures that trigger a lock.
            duration: Lock length.
        """
        self._user_repo = user_repo
        self._event_bus = event_bus
        self._logger = logger
        self._threshold = threshold
        self._duration = duration

    async def handle(self, cmd: RecordFailedLogin) -> Result[LockoutState | None, str]:
        """Handle a failed login report.

        Args:
            cmd: RecordFailedLogin command.

        Returns:
            Success(LockoutState) with the new state, or Success(None) when no
            account matches the email.
        """
        now = datetime.now(UTC)
        email = cmd.email.strip().lower()

        # Step 1: Find user
        user = await self._user_repo.find_by_email(email)
        if user is None:
            self._logger.debug("failed_login_unknown_email", ip_address=cmd.ip_address)
            return Success(value=None)

        # Step 2-4: Fresh read, apply policy, persist
        state = await self._user_repo.get_lockout_state(user.id) or user.lockout_state
        new_state = record_failure(
            state, now, threshold=self._threshold, duration=self._duration
        )
        await self._user_repo.save_lockout_state(user.id, new_state)

        # Step 5: Events
        await self._event_bus.publish(
            UserLoginFailed(
                reason=cmd.reason,
                subject_id=user.subject_id,
                email=email,
                ip_address=cmd.ip_address,
            )
        )
        if new_state.locked_until is not None and new_state.locked_until != state.locked_until:
            await self._event_bus.publish(
                UserAccountLocked(
                    user_id=user.id,
                    failed_login_attempts=new_state.failed_login_attempts,
                )
            )

        return Success(value=new_state)
