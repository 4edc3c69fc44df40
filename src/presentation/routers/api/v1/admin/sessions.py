"""Admin session maintenance router.

Endpoints:
    DELETE /api/v1/admin/sessions/expired - Purge sessions past hard expiry
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.commands.handlers.session_maintenance_handlers import (
    PurgeExpiredSessionsHandler,
)
from src.application.commands.session_commands import PurgeExpiredSessions
from src.core.container import get_purge_expired_sessions_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import AdminIdentity
from src.schemas.session_schemas import SessionCountResponse

router = APIRouter(prefix="/sessions", tags=["Admin"])


@router.delete(
    "/expired",
    response_model=SessionCountResponse,
    summary="Purge expired sessions",
    description="Physically delete every session past its expiry, for all users.",
)
async def purge_expired_sessions(
    _admin: AdminIdentity,
    handler: Annotated[
        PurgeExpiredSessionsHandler, Depends(get_purge_expired_sessions_handler)
    ],
) -> SessionCountResponse:
    """DELETE /api/v1/admin/sessions/expired -> 200 OK"""
    result = await handler.handle(PurgeExpiredSessions())

    match result:
        case Success(value=count):
            return SessionCountResponse(message="Expired sessions purged.", count=count)
        case Failure(error=error):
            raise RuntimeError(f"Session purge failed: {error}")
