"""Sessions resource router.

Device sessions of the calling user. Every route runs the session-activity
check first, so an idle-expired device gets SESSION_EXPIRED before anything
else happens.

Endpoints:
    GET    /api/v1/sessions             - List active sessions
    DELETE /api/v1/sessions             - Revoke all sessions
    DELETE /api/v1/sessions/{id}        - Revoke one session
    POST   /api/v1/sessions/{id}/trust  - Mark a device as trusted
    POST   /api/v1/sessions/sweeps      - Expire idle sessions now
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse, Response

from src.application.commands.handlers.revoke_all_sessions_handler import (
    RevokeAllSessionsHandler,
)
from src.application.commands.handlers.revoke_session_handler import (
    RevokeSessionHandler,
)
from src.application.commands.handlers.session_maintenance_handlers import (
    SweepIdleSessionsHandler,
    TrustSessionDeviceHandler,
)
from src.application.commands.session_commands import (
    RevokeAllUserSessions,
    RevokeSession,
    SweepIdleSessions,
    TrustSessionDevice,
)
from src.application.queries.handlers.list_sessions_handler import ListSessionsHandler
from src.application.queries.session_queries import ListUserSessions
from src.core.container import (
    get_list_sessions_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
    get_sweep_idle_sessions_handler,
    get_trust_session_device_handler,
)
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import ActiveUserId
from src.presentation.routers.api.middleware.request_context import (
    get_device_fingerprint,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.session_schemas import (
    SessionCountResponse,
    SessionListResponse,
    SessionResponse,
)

router = APIRouter(prefix="/sessions", tags=["Sessions"])

SessionId = Annotated[UUID, Path(description="Session identifier")]


@router.get(
    "",
    response_model=SessionListResponse,
    summary="List sessions",
    description="Active sessions of the current user, most recent activity first.",
)
async def list_sessions(
    request: Request,
    user_id: ActiveUserId,
    handler: Annotated[ListSessionsHandler, Depends(get_list_sessions_handler)],
) -> SessionListResponse:
    """GET /api/v1/sessions -> 200 OK"""
    result = await handler.handle(
        ListUserSessions(
            user_id=user_id,
            current_fingerprint=get_device_fingerprint(request),
        )
    )

    match result:
        case Success(value=listing):
            return SessionListResponse(
                sessions=[
                    SessionResponse.from_entity(item.session, is_current=item.is_current)
                    for item in listing.sessions
                ],
                total_count=listing.total_count,
            )
        case Failure(error=error):
            raise RuntimeError(f"Session listing failed: {error}")


@router.delete(
    "",
    response_model=SessionCountResponse,
    summary="Revoke all sessions",
)
async def revoke_all_sessions(
    user_id: ActiveUserId,
    handler: Annotated[
        RevokeAllSessionsHandler, Depends(get_revoke_all_sessions_handler)
    ],
) -> SessionCountResponse:
    """DELETE /api/v1/sessions -> 200 OK"""
    result = await handler.handle(RevokeAllUserSessions(user_id=user_id))

    match result:
        case Success(value=count):
            return SessionCountResponse(message="All sessions revoked.", count=count)
        case Failure(error=error):
            raise RuntimeError(f"Revoking sessions failed: {error}")


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Session not found", "model": ProblemDetails}},
    summary="Revoke session",
)
async def revoke_session(
    request: Request,
    session_id: SessionId,
    user_id: ActiveUserId,
    handler: Annotated[RevokeSessionHandler, Depends(get_revoke_session_handler)],
) -> Response:
    """DELETE /api/v1/sessions/{id} -> 204 No Content"""
    result = await handler.handle(RevokeSession(session_id=session_id, user_id=user_id))

    match result:
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())


@router.post(
    "/{session_id}/trust",
    response_model=SessionResponse,
    responses={404: {"description": "Session not found", "model": ProblemDetails}},
    summary="Trust device",
)
async def trust_session(
    request: Request,
    session_id: SessionId,
    user_id: ActiveUserId,
    handler: Annotated[
        TrustSessionDeviceHandler, Depends(get_trust_session_device_handler)
    ],
) -> SessionResponse | JSONResponse:
    """POST /api/v1/sessions/{id}/trust -> 200 OK"""
    result = await handler.handle(
        TrustSessionDevice(session_id=session_id, user_id=user_id)
    )

    match result:
        case Success(value=session):
            return SessionResponse.from_entity(
                session,
                is_current=session.device.fingerprint == get_device_fingerprint(request),
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())


@router.post(
    "/sweeps",
    response_model=SessionCountResponse,
    summary="Expire idle sessions",
    description="Deactivate sessions idle past the timeout. Idempotent.",
)
async def sweep_sessions(
    user_id: ActiveUserId,
    handler: Annotated[SweepIdleSessionsHandler, Depends(get_sweep_idle_sessions_handler)],
) -> SessionCountResponse:
    """POST /api/v1/sessions/sweeps -> 200 OK"""
    result = await handler.handle(SweepIdleSessions(user_id=user_id))

    match result:
        case Success(value=count):
            return SessionCountResponse(message="Idle sessions expired.", count=count)
        case Failure(error=error):
            raise RuntimeError(f"Session sweep failed: {error}")
