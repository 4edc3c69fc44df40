"""Authentication router.

Endpoints:
    POST /api/v1/auth/login           - Sign in with an identity provider token
    POST /api/v1/auth/login-failures  - Report a failed provider sign-in (service key)
    GET  /api/v1/auth/identity        - Identity attached to the request, if any
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials

from src.application.commands.auth_commands import Login, RecordFailedLogin
from src.application.commands.handlers.login_handler import LoginHandler
from src.application.commands.handlers.record_failed_login_handler import (
    RecordFailedLoginHandler,
)
from src.application.dtos.auth_dtos import AuthenticatedIdentity
from src.core.container import get_login_handler, get_record_failed_login_handler
from src.core.result import Failure, Success
from src.domain.enums.user_role import UserRole
from src.presentation.routers.api.middleware.auth_dependencies import (
    bearer_scheme,
    get_current_identity_optional,
    require_service_key,
)
from src.presentation.routers.api.middleware.request_context import (
    get_client_ip,
    get_device_fingerprint,
    get_user_agent,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    LoginFailureRequest,
    LoginFailureResponse,
    LoginRequest,
    LoginResponse,
)
from src.schemas.user_schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=LoginResponse,
    responses={
        401: {"description": "Missing, expired, revoked or invalid token", "model": ProblemDetails},
        403: {"description": "Email not verified or account inactive", "model": ProblemDetails},
        423: {"description": "Account temporarily locked", "model": ProblemDetails},
    },
    summary="Sign in",
    description="Verify the bearer token, reconcile the user record and open a device session.",
)
async def login(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    handler: Annotated[LoginHandler, Depends(get_login_handler)],
    data: Annotated[LoginRequest | None, Body()] = None,
) -> LoginResponse | JSONResponse:
    """Sign in.

    POST /api/v1/auth/login -> 200 OK

    Args:
        request: FastAPI request object.
        credentials: Bearer token from the Authorization header.
        handler: Login handler (injected).
        data: Optional client hints (display name).

    Returns:
        LoginResponse on success, Problem Details otherwise.
    """
    hints = data or LoginRequest()
    result = await handler.handle(
        Login(
            credential=credentials.credentials if credentials else None,
            name_hint=hints.name,
            role_hint=UserRole.parse(hints.role),
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
            device_fingerprint=get_device_fingerprint(request),
        )
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())
        case Success(value=login_result):
            return LoginResponse(
                success=True,
                message="Welcome!" if login_result.is_new_user else "Welcome back!",
                user=UserResponse.from_entity(login_result.user),
                is_new_user=login_result.is_new_user,
            )


@router.post(
    "/login-failures",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=LoginFailureResponse,
    dependencies=[Depends(require_service_key)],
    responses={
        403: {"description": "Missing or wrong X-Service-Key", "model": ProblemDetails},
    },
    summary="Report failed sign-in",
    description=(
        "Record a failed identity provider sign-in for lockout accounting. "
        "Only trusted backends holding the service key may report. "
        "The response never reveals whether the email exists."
    ),
)
async def report_login_failure(
    request: Request,
    data: LoginFailureRequest,
    handler: Annotated[RecordFailedLoginHandler, Depends(get_record_failed_login_handler)],
) -> LoginFailureResponse:
    """Report a failed sign-in.

    POST /api/v1/auth/login-failures -> 202 Accepted
    """
    await handler.handle(
        RecordFailedLogin(
            email=str(data.email),
            ip_address=get_client_ip(request),
            reason=data.reason,
        )
    )
    return LoginFailureResponse()


@router.get(
    "/identity",
    summary="Current identity",
    description="Identity attached to the request, or anonymous. Never fails.",
)
async def get_identity(
    identity: Annotated[
        AuthenticatedIdentity | None, Depends(get_current_identity_optional)
    ],
) -> dict[str, Any]:
    """GET /api/v1/auth/identity -> 200 OK"""
    if identity is None:
        return {"authenticated": False}
    return {
        "authenticated": True,
        "subject_id": identity.subject_id,
        "email": identity.email,
        "name": identity.name,
        "avatar_url": identity.avatar_url,
        "role": identity.role.value,
    }
