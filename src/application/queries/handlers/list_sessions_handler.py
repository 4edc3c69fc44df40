"""Device list for the signed-in user."""

from dataclasses import dataclass
from datetime import UTC, datetime

from src.application.queries.session_queries import ListUserSessions
from src.core.result import Result, Success
from src.domain.entities.session import Session
from src.domain.protocols import SessionRepository


@dataclass
class SessionListItem:
    session: Session
    is_current: bool


@dataclass
class SessionListResult:
    sessions: list[SessionListItem]
    total_count: int


class ListSessionsHandler:
    """Lists active sessions and marks the one on the caller's device.

    A session is current when its fingerprint equals the caller's; with no
    caller fingerprint nothing is marked.
    """

    def __init__(self, session_repo: SessionRepository) -> None:
        self._session_repo = session_repo

    async def handle(self, query: ListUserSessions) -> Result[SessionListResult, str]:
        active = await self._session_repo.list_active_by_user(
            query.user_id, datetime.now(UTC)
        )
        fingerprint = query.current_fingerprint

        items = [
            SessionListItem(
                session=session,
                is_current=fingerprint is not None
                and session.device.fingerprint == fingerprint,
            )
            for session in sorted(
                active, key=lambda s: s.last_activity, reverse=True
            )
        ]
        return Success(value=SessionListResult(sessions=items, total_count=len(items)))
