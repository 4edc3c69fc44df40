"""Get current user query handler."""

from src.application.queries.user_queries import GetCurrentUser
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.protocols import UserRepository


class GetCurrentUserHandler:
    """Handler for fetching the caller's user record."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: GetCurrentUser) -> Result[User, DomainError]:
        """Handle get current user query.

        Returns:
            Success(User) if the identity has been reconciled.
            Failure(NotFoundError) before the first login.
        """
        email = query.email.strip().lower() if query.email else None
        user = await self._user_repo.find_by_subject_or_email(query.subject_id, email)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found. Please sign in first.",
                    resource_type="User",
                    resource_id=query.subject_id,
                )
            )
        return Success(value=user)
