"""Session DTOs.

DTOs:
    - SessionOpenResult: Result from OpenOrRefreshSession command
    - SessionActivity: Result from ValidateSessionActivity command
"""

from dataclasses import dataclass
from uuid import UUID

from src.domain.entities.session import Session


@dataclass(frozen=True, kw_only=True)
class SessionOpenResult:
    """Response from opening or refreshing a device session.

    Attributes:
        session: Session as stored.
        created: False when an existing device session was refreshed.
    """

    session: Session
    created: bool


@dataclass(frozen=True, kw_only=True)
class SessionActivity:
    """Response from a successful activity check.

    Attributes:
        session_id: Touched session, None when no session matched (soft pass).
    """

    session_id: UUID | None = None
