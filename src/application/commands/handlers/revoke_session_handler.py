"""Revoke session handler.

Flow:
1. Find session by ID
2. Verify ownership (user_id matches)
3. Mark session inactive (no-op if already inactive)
4. Update database
5. Drop the reference from the user record
6. Publish SessionRevoked event
7. Return success

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols, events)
- NO infrastructure imports (repositories are injected via protocols)
"""

from datetime import UTC, datetime

from src.application.commands.session_commands import RevokeSession
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.session import Session
from src.domain.events.session_events import SessionRevoked
from src.domain.protocols import EventBusProtocol, SessionRepository, UserRepository


class RevokeSessionHandler:
    """Handler for session revocation command.

    Handles single session revocation (logout, manual revoke). Revoking an
    already inactive session succeeds without side effects.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize revoke session handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
            user_repo: User repository (session references).
            event_bus: Event bus for publishing domain events.
        """
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._event_bus = event_bus

    async def handle(self, cmd: RevokeSession) -> Result[Session, DomainError]:
        """Handle revoke session command.

        Args:
            cmd: RevokeSession command with session_id, user_id, reason.

        Returns:
            Success(Session) with the (now inactive) session.
            Failure(NotFoundError) if the session does not exist or belongs
            to another user.
        """
        now = datetime.now(UTC)

        # Step 1-2: Find and check ownership; other users' sessions look missing
        session = await self._session_repo.find_by_id(cmd.session_id)
        if session is None or session.user_id != cmd.user_id:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.SESSION_NOT_FOUND,
                    message="Session not found.",
                    resource_type="Session",
                    resource_id=str(cmd.session_id),
                )
            )

        # Step 3: Mark inactive
        if not session.deactivate(now, cmd.reason):
            return Success(value=session)

        # Step 4-5: Persist
        await self._session_repo.update(session)
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is not None:
            user.remove_session_ref(session.id)
            user.updated_at = now
            await self._user_repo.update(user)

        # Step 6: Event
        await self._event_bus.publish(
            SessionRevoked(
                session_id=session.id,
                user_id=session.user_id,
                reason=cmd.reason,
            )
        )

        return Success(value=session)
