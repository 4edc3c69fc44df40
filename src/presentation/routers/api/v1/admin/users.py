"""Admin user management router.

Endpoints:
    PATCH /api/v1/admin/users/{user_id}/role - Change a user's role
    PATCH /api/v1/admin/users/{user_id}/status - Suspend, ban or reactivate
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import (
    ChangeAccountStatus,
    ChangeUserRole,
)
from src.application.commands.handlers.change_account_status_handler import (
    ChangeAccountStatusHandler,
)
from src.application.commands.handlers.change_user_role_handler import (
    ChangeUserRoleHandler,
)
from src.core.container import (
    get_change_account_status_handler,
    get_change_user_role_handler,
)
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import AdminIdentity
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.user_schemas import (
    AccountStatusUpdateRequest,
    UserResponse,
    UserRoleUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Admin"])


@router.patch(
    "/{user_id}/role",
    response_model=UserResponse,
    responses={
        403: {"description": "Caller is not an administrator", "model": ProblemDetails},
        404: {"description": "User not found", "model": ProblemDetails},
    },
    summary="Change user role",
    description=(
        "Store a new authoritative role. The identity provider claim is "
        "updated in the background."
    ),
)
async def change_user_role(
    request: Request,
    user_id: Annotated[UUID, Path(description="User identifier")],
    data: UserRoleUpdateRequest,
    admin: AdminIdentity,
    handler: Annotated[ChangeUserRoleHandler, Depends(get_change_user_role_handler)],
) -> UserResponse | JSONResponse:
    """PATCH /api/v1/admin/users/{user_id}/role -> 200 OK"""
    result = await handler.handle(
        ChangeUserRole(user_id=user_id, role=data.role, changed_by=admin.subject_id)
    )

    match result:
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())


@router.patch(
    "/{user_id}/status",
    response_model=UserResponse,
    responses={
        403: {"description": "Caller is not an administrator", "model": ProblemDetails},
        404: {"description": "User not found", "model": ProblemDetails},
    },
    summary="Change account status",
    description=(
        "Suspend, ban or reactivate a user. Leaving active revokes every "
        "open session, and request authentication rejects the user on the "
        "next call."
    ),
)
async def change_account_status(
    request: Request,
    user_id: Annotated[UUID, Path(description="User identifier")],
    data: AccountStatusUpdateRequest,
    admin: AdminIdentity,
    handler: Annotated[
        ChangeAccountStatusHandler, Depends(get_change_account_status_handler)
    ],
) -> UserResponse | JSONResponse:
    """PATCH /api/v1/admin/users/{user_id}/status -> 200 OK"""
    result = await handler.handle(
        ChangeAccountStatus(
            user_id=user_id,
            status=data.account_status,
            changed_by=admin.subject_id,
            reason=data.reason,
        )
    )

    match result:
        case Success(value=user):
            return UserResponse.from_entity(user)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())
