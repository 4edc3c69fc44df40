"""Users resource router.

Endpoints:
    GET /api/v1/users/me - Current user (session-activity checked)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.application.queries.user_queries import GetCurrentUser
from src.core.container import get_current_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import ActiveIdentity
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.user_schemas import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/me",
    response_model=UserResponse,
    responses={
        401: {"description": "Not authenticated or session expired", "model": ProblemDetails},
        404: {"description": "Verified identity that never signed in", "model": ProblemDetails},
    },
    summary="Get current user",
)
async def get_me(
    request: Request,
    identity: ActiveIdentity,
    handler: Annotated[GetCurrentUserHandler, Depends(get_current_user_handler)],
) -> UserResponse | JSONResponse:
    """GET /api/v1/users/me -> 200 OK"""
    result = await handler.handle(
        GetCurrentUser(subject_id=identity.subject_id, email=identity.email)
    )

    match result:
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())
