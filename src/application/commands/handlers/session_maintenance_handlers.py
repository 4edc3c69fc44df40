"""Session maintenance handlers.

Handlers:
    - SweepIdleSessionsHandler: inactivate a user's idle-expired sessions
    - PurgeExpiredSessionsHandler: delete sessions past their hard expiry
    - TrustSessionDeviceHandler: mark a session's device as trusted

Sweeping is idempotent: a second sweep finds nothing left to inactivate.
"""

from datetime import UTC, datetime, timedelta

from src.application.commands.session_commands import (
    PurgeExpiredSessions,
    SweepIdleSessions,
    TrustSessionDevice,
)
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.session import DEFAULT_IDLE_TIMEOUT, Session
from src.domain.protocols import LoggerProtocol, SessionRepository, UserRepository


class SweepIdleSessionsHandler:
    """Handler for per-user idle session sweeps."""

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        logger: LoggerProtocol,
        idle_timeout: timedelta = DEFAULT_IDLE_TIMEOUT,
    ) -> None:
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._logger = logger
        self._idle_timeout = idle_timeout

    async def handle(self, cmd: SweepIdleSessions) -> Result[int, str]:
        """Inactivate idle sessions and resync the user's session references.

        Returns:
            Success(int) with the number of sessions inactivated.
        """
        now = datetime.now(UTC)
        count = await self._session_repo.deactivate_idle(
            cmd.user_id, now - self._idle_timeout, now
        )
        if count == 0:
            return Success(value=0)

        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is not None:
            remaining = await self._session_repo.list_active_by_user(cmd.user_id, now)
            user.active_sessions = [session.to_ref() for session in remaining]
            user.updated_at = now
            await self._user_repo.update(user)

        self._logger.info("idle_sessions_swept", user_id=str(cmd.user_id), count=count)
        return Success(value=count)


class PurgeExpiredSessionsHandler:
    """Handler for store-level purge of hard-expired sessions."""

    def __init__(self, session_repo: SessionRepository, logger: LoggerProtocol) -> None:
        self._session_repo = session_repo
        self._logger = logger

    async def handle(self, cmd: PurgeExpiredSessions) -> Result[int, str]:
        """Delete every session whose expires_at has passed.

        Returns:
            Success(int) with the number of rows deleted.
        """
        count = await self._session_repo.purge_expired(datetime.now(UTC))
        self._logger.info("expired_sessions_purged", count=count)
        return Success(value=count)


class TrustSessionDeviceHandler:
    """Handler for marking a device as trusted."""

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, cmd: TrustSessionDevice) -> Result[Session, DomainError]:
        """Mark the session's device trusted.

        Returns:
            Success(Session) with the updated session.
            Failure(NotFoundError) if the session is missing, belongs to
            another user, or is no longer usable.
        """
        session = await self._session_repo.find_by_id(cmd.session_id)
        if (
            session is None
            or session.user_id != cmd.user_id
            or not session.is_usable(datetime.now(UTC))
        ):
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.SESSION_NOT_FOUND,
                    message="Session not found.",
                    resource_type="Session",
                    resource_id=str(cmd.session_id),
                )
            )

        if not session.is_trusted:
            session.mark_trusted()
            await self._session_repo.update(session)
        return Success(value=session)
