"""Change account status handler.

Administrator path for suspending, banning and reactivating users.

Flow:
1. Find user by id
2. Apply the new status (no-op when unchanged)
3. Persist the user (leaving ACTIVE also clears the session refs)
4. Leaving ACTIVE: deactivate every session
5. Publish UserAccountStatusChanged
6. Return Success(user)

Request authentication re-reads the stored status on every call, so a
suspended user is rejected on the next request even with a valid token.
"""

from datetime import UTC, datetime

from src.application.commands.auth_commands import ChangeAccountStatus
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums.account_status import AccountStatus
from src.domain.events.auth_events import UserAccountStatusChanged
from src.domain.protocols import (
    EventBusProtocol,
    SessionRepository,
    UserRepository,
)


class ChangeAccountStatusHandler:
    """Handler for administrator status changes."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        event_bus: EventBusProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._session_repo = session_repo
        self._event_bus = event_bus

    async def handle(self, cmd: ChangeAccountStatus) -> Result[User, DomainError]:
        """Handle status change.

        Returns:
            Success(User) with the stored user.
            Failure(NotFoundError) if the user does not exist.
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found.",
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        now = datetime.now(UTC)
        previous_status = user.account_status
        if not user.change_status(cmd.status, cmd.reason, now):
            return Success(value=user)

        leaving_active = cmd.status != AccountStatus.ACTIVE
        if leaving_active:
            user.clear_session_refs()
        # Status first: request authentication rejects from here on
        await self._user_repo.update(user)

        revoked_count = 0
        if leaving_active:
            revoked_count = await self._session_repo.deactivate_all_for_user(
                user.id, now, f"account_{cmd.status.value}"
            )

        await self._event_bus.publish(
            UserAccountStatusChanged(
                user_id=user.id,
                previous_status=previous_status.value,
                new_status=user.account_status.value,
                changed_by=cmd.changed_by,
                reason=user.status_reason,
                revoked_count=revoked_count,
            )
        )
        return Success(value=user)
