"""Validate session activity handler.

Runs on every request that passes through the session-activity variant of
the auth dependency.

Flow:
1. Find the active session for (user, device fingerprint)
2. None: soft pass (the user signed in before sessions were tracked, or the
   device changed its User-Agent)
3. Idle past the timeout: deactivate, drop the user reference, publish
   SessionIdleExpired, Failure(SESSION_EXPIRED)
4. Otherwise: touch last activity, Success

Once a session has been idle-expired it is no longer active, so a repeated
call soft-passes instead of reporting SESSION_EXPIRED again.
"""

from datetime import UTC, datetime, timedelta

from src.application.commands.session_commands import ValidateSessionActivity
from src.application.dtos.session_dtos import SessionActivity
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities.session import DEFAULT_IDLE_TIMEOUT
from src.domain.errors import SessionExpiredError
from src.domain.events.session_events import SessionIdleExpired
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    SessionRepository,
    UserRepository,
)

IDLE_TIMEOUT_REASON = "idle_timeout"


class ValidateSessionActivityHandler:
    """Handler for per-request session idle checks."""

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
        idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT,
    ) -> None:
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._event_bus = event_bus
        self._logger = logger
        self._idle_timeout = idle_timeout

    async def handle(
        self, cmd: ValidateSessionActivity
    ) -> Result[SessionActivity, DomainError]:
        """Handle activity validation.

        Args:
            cmd: ValidateSessionActivity command.

        Returns:
            Success(SessionActivity) when the request may proceed.
            Failure(SessionExpiredError) when the session was idle-expired.
        """
        now = datetime.now(UTC)

        # Step 1: Device session
        session = await self._session_repo.find_active_by_device(
            cmd.user_id, cmd.device_fingerprint, now
        )

        # Step 2: Soft pass
        if session is None:
            return Success(value=SessionActivity(session_id=None))

        # Step 3: Idle expiry
        if session.is_idle(now, self._idle_timeout):
            session.deactivate(now, IDLE_TIMEOUT_REASON)
            await self._session_repo.update(session)

            user = await self._user_repo.find_by_id(cmd.user_id)
            if user is not None:
                user.remove_session_ref(session.id)
                user.updated_at = now
                await self._user_repo.update(user)

            await self._event_bus.publish(
                SessionIdleExpired(session_id=session.id, user_id=session.user_id)
            )
            return Failure(
                error=SessionExpiredError(
                    code=ErrorCode.SESSION_EXPIRED,
                    message="Session expired due to inactivity. Please sign in again.",
                )
            )

        # Step 4: Touch (best effort)
        session.touch(now)
        try:
            await self._session_repo.update(session)
        except Exception as e:
            self._logger.error(
                "session_touch_failed", error=e, sid=str(session.id)
            )
        return Success(value=SessionActivity(session_id=session.id))
