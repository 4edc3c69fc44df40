"""Revoke all sessions handler.

Flow:
1. Deactivate every active session of the user (single bulk update)
2. Clear the session references on the user record
3. Publish AllSessionsRevoked event
4. Return Success(count)
"""

from datetime import UTC, datetime

from src.application.commands.session_commands import RevokeAllUserSessions
from src.core.result import Result, Success
from src.domain.events.session_events import AllSessionsRevoked
from src.domain.protocols import EventBusProtocol, SessionRepository, UserRepository


class RevokeAllSessionsHandler:
    """Handler for "log out everywhere"."""

    def __init__(
        self,
        session_repo: SessionRepository,
        user_repo: UserRepository,
        event_bus: EventBusProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            session_repo: Session repository for persistence.
            user_repo: User repository (session references).
            event_bus: Event bus for publishing domain events.
        """
        self._session_repo = session_repo
        self._user_repo = user_repo
        self._event_bus = event_bus

    async def handle(self, cmd: RevokeAllUserSessions) -> Result[int, str]:
        """Handle revoke-all command.

        Args:
            cmd: RevokeAllUserSessions command.

        Returns:
            Success(int) with the number of sessions deactivated.
        """
        now = datetime.now(UTC)

        # Step 1: Bulk deactivate
        count = await self._session_repo.deactivate_all_for_user(
            cmd.user_id, now, cmd.reason
        )

        # Step 2: References
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is not None and user.active_sessions:
            user.clear_session_refs()
            user.updated_at = now
            await self._user_repo.update(user)

        # Step 3: Event
        await self._event_bus.publish(
            AllSessionsRevoked(
                user_id=cmd.user_id,
                session_count=count,
                reason=cmd.reason,
            )
        )

        return Success(value=count)
