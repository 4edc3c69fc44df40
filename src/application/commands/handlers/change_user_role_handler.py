"""Change user role handler.

Trusted administrator path for changing the authoritative role.

Flow:
1. Find user by id
2. Store the new role
3. Create the matching role profile shell (best effort)
4. Enqueue role-claim propagation (best effort)
5. Publish UserRoleChanged
6. Return Success(user)
"""

from datetime import UTC, datetime

from src.application.commands.auth_commands import ChangeUserRole
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.events.auth_events import UserRoleChanged
from src.domain.protocols import (
    EventBusProtocol,
    LoggerProtocol,
    ProfileRepository,
    RoleClaimSyncProtocol,
    UserRepository,
)


class ChangeUserRoleHandler:
    """Handler for administrator role changes."""

    def __init__(
        self,
        user_repo: UserRepository,
        profile_repo: ProfileRepository,
        claim_sync: RoleClaimSyncProtocol,
        event_bus: EventBusProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._profile_repo = profile_repo
        self._claim_sync = claim_sync
        self._event_bus = event_bus
        self._logger = logger

    async def handle(self, cmd: ChangeUserRole) -> Result[User, DomainError]:
        """Handle role change.

        Args:
            cmd: ChangeUserRole command.

        Returns:
            Success(User) with the updated user.
            Failure(NotFoundError) if the user does not exist.
        """
        # Step 1: Find user
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

        # Step 2: Store role
        previous_role = user.role
        user.role = cmd.role
        user.updated_at = datetime.now(UTC)
        await self._user_repo.update(user)

        # Step 3: Profile shell
        try:
            await self._profile_repo.ensure_profile(user)
        except Exception as e:
            self._logger.error(
                "role_profile_creation_failed",
                error=e,
                user_id=str(user.id),
                role=user.role.value,
            )

        # Step 4: Claim propagation
        if not self._claim_sync.enqueue(user.subject_id, user.role.value):
            self._logger.warning("role_claim_enqueue_rejected", user_id=str(user.id))

        # Step 5: Event
        await self._event_bus.publish(
            UserRoleChanged(
                user_id=user.id,
                previous_role=previous_role.value,
                new_role=user.role.value,
                changed_by=cmd.changed_by,
            )
        )

        return Success(value=user)
