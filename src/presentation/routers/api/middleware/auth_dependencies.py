"""Request authentication dependencies.

FastAPI dependencies that run the authentication state machine on the bearer
credential:

    NoToken -> TokenPresent -> {VerificationFailed | Verified}
      -> email check (skipped for trusted OAuth providers)
      -> lock check (fresh re-read) -> account status check -> identity

Variants:
    get_current_identity: required; failures become Problem Details responses
    get_current_identity_optional: any failure yields None
    get_active_identity: required, plus idle-session validation keyed on the
        request's device fingerprint
    require_admin: get_active_identity restricted to the admin role
    require_service_key: backend-to-backend calls holding the shared key

Usage:
    @router.get("/users/me")
    async def me(identity: AuthenticatedIdentity = Depends(get_active_identity)):
        return {"subject_id": identity.subject_id}
"""

import secrets
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from src.application.commands.auth_commands import AuthenticateRequest
from src.application.commands.handlers.authenticate_request_handler import (
    AuthenticateRequestHandler,
)
from src.application.commands.handlers.validate_session_activity_handler import (
    ValidateSessionActivityHandler,
)
from src.application.commands.session_commands import ValidateSessionActivity
from src.application.dtos.auth_dtos import AuthenticatedIdentity
from src.core.config import settings
from src.core.container import (
    get_authenticate_request_handler,
    get_validate_session_activity_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import AuthorizationError, NotFoundError
from src.core.result import Failure, Success
from src.domain.enums.user_role import UserRole
from src.domain.errors import AccessDeniedError
from src.presentation.routers.api.middleware.request_context import (
    get_client_ip,
    get_device_fingerprint,
)
from src.presentation.routers.api.v1.errors import DomainErrorException

# auto_error=False: a missing header is reported as TOKEN_MISSING by the
# handler instead of FastAPI's generic 403.
bearer_scheme = HTTPBearer(auto_error=False)
service_key_scheme = APIKeyHeader(name="X-Service-Key", auto_error=False)


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    handler: Annotated[
        AuthenticateRequestHandler, Depends(get_authenticate_request_handler)
    ],
) -> AuthenticatedIdentity:
    """Authenticate the request or fail with the mapped status/code.

    Raises:
        DomainErrorException: TOKEN_MISSING, TOKEN_EXPIRED, TOKEN_REVOKED,
            INVALID_TOKEN, EMAIL_NOT_VERIFIED, ACCOUNT_LOCKED or an inactive
            account status.
    """
    result = await handler.handle(
        AuthenticateRequest(
            credential=credentials.credentials if credentials else None,
            ip_address=get_client_ip(request),
        )
    )

    match result:
        case Success(value=identity):
            request.state.identity = identity
            return identity
        case Failure(error=error):
            raise DomainErrorException(error)


async def get_current_identity_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    handler: Annotated[
        AuthenticateRequestHandler, Depends(get_authenticate_request_handler)
    ],
) -> AuthenticatedIdentity | None:
    """Same checks as get_current_identity; any failure yields None."""
    if credentials is None:
        return None

    result = await handler.handle(
        AuthenticateRequest(
            credential=credentials.credentials,
            ip_address=get_client_ip(request),
        )
    )

    match result:
        case Success(value=identity):
            request.state.identity = identity
            return identity
        case Failure():
            return None

    return None


async def get_active_identity(
    request: Request,
    identity: Annotated[AuthenticatedIdentity, Depends(get_current_identity)],
    handler: Annotated[
        ValidateSessionActivityHandler, Depends(get_validate_session_activity_handler)
    ],
) -> AuthenticatedIdentity:
    """Authenticate, then check and touch the device session.

    Identities without a stored user (verified but never logged in) have no
    session to validate and pass through.

    Raises:
        DomainErrorException: SESSION_EXPIRED when the device session idled out.
    """
    if identity.user_id is None:
        return identity

    result = await handler.handle(
        ValidateSessionActivity(
            user_id=identity.user_id,
            device_fingerprint=get_device_fingerprint(request),
        )
    )

    match result:
        case Success(value=activity):
            request.state.session_id = activity.session_id
            return identity
        case Failure(error=error):
            raise DomainErrorException(error)


async def require_admin(
    identity: Annotated[AuthenticatedIdentity, Depends(get_active_identity)],
) -> AuthenticatedIdentity:
    """Restrict a route to administrators (stored role, never the claim)."""
    if identity.role != UserRole.ADMIN:
        raise DomainErrorException(
            AccessDeniedError(
                code=ErrorCode.PERMISSION_DENIED,
                message="Administrator role required.",
                required_permission=UserRole.ADMIN.value,
            )
        )
    return identity


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(get_current_identity)]
ActiveIdentity = Annotated[AuthenticatedIdentity, Depends(get_active_identity)]
AdminIdentity = Annotated[AuthenticatedIdentity, Depends(require_admin)]


async def get_active_user_id(identity: ActiveIdentity) -> UUID:
    """Internal user id of the caller.

    Raises:
        DomainErrorException: USER_NOT_FOUND when the identity is verified but
            has never completed a login.
    """
    if identity.user_id is None:
        raise DomainErrorException(
            NotFoundError(
                code=ErrorCode.USER_NOT_FOUND,
                message="User not found. Please sign in first.",
                resource_type="User",
                resource_id=identity.subject_id,
            )
        )
    return identity.user_id


ActiveUserId = Annotated[UUID, Depends(get_active_user_id)]


async def require_service_key(
    service_key: Annotated[str | None, Depends(service_key_scheme)],
) -> None:
    """Admit only trusted backends presenting the configured service key.

    Fails closed while ``login_failure_report_key`` is unset.

    Raises:
        DomainErrorException: SERVICE_KEY_INVALID (403).
    """
    expected = settings.login_failure_report_key
    if (
        not expected
        or not service_key
        or not secrets.compare_digest(service_key.encode(), expected.encode())
    ):
        raise DomainErrorException(
            AuthorizationError(
                code=ErrorCode.SERVICE_KEY_INVALID,
                message="A valid service key is required.",
            )
        )
