"""Authentication handler dependency factories.

Request-scoped handler instances for:
- Request authentication (bearer verification + policy checks)
- Login (authenticate, reconcile, open device session)
- Failed sign-in reporting (lockout policy)
- Administrator role and account status changes
- Current user lookup
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import (
    get_db_session,
    get_device_enricher,
    get_identity_provider,
    get_location_enricher,
    get_logger,
    get_role_claim_sync,
)

if TYPE_CHECKING:
    from src.application.commands.handlers.change_account_status_handler import (
        ChangeAccountStatusHandler,
    )
    from src.application.commands.handlers.authenticate_request_handler import (
        AuthenticateRequestHandler,
    )
    from src.application.commands.handlers.change_user_role_handler import (
        ChangeUserRoleHandler,
    )
    from src.application.commands.handlers.login_handler import LoginHandler
    from src.application.commands.handlers.record_failed_login_handler import (
        RecordFailedLoginHandler,
    )
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )


# ============================================================================
# Authentication Handler Factories
# ============================================================================


async def get_authenticate_request_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "AuthenticateRequestHandler":
    """Get AuthenticateRequest handler (request-scoped).

    Dependencies:
    - FirebaseIdentityProvider (app-scoped singleton)
    - UserRepository (request-scoped, uses session)
    - Trusted OAuth providers from settings

    Usage:
        @router.get("/users/me")
        async def me(
            handler: AuthenticateRequestHandler = Depends(get_authenticate_request_handler),
        ):
            result = await handler.handle(AuthenticateRequest(credential=token))
    """
    from src.application.commands.handlers.authenticate_request_handler import (
        AuthenticateRequestHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return AuthenticateRequestHandler(
        identity_provider=get_identity_provider(),
        user_repo=UserRepository(session=session),
        logger=get_logger(),
        trusted_providers=settings.trusted_oauth_provider_set,
    )


async def get_login_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginHandler":
    """Get Login handler (request-scoped).

    Builds the authentication, reconciliation and session handlers on one
    database session so the whole login shares a transaction scope.
    """
    from src.application.commands.handlers.authenticate_request_handler import (
        AuthenticateRequestHandler,
    )
    from src.application.commands.handlers.login_handler import LoginHandler
    from src.application.commands.handlers.open_or_refresh_session_handler import (
        OpenOrRefreshSessionHandler,
    )
    from src.application.commands.handlers.reconcile_identity_handler import (
        ReconcileIdentityHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ProfileRepository,
        SessionRepository,
        UserRepository,
    )

    logger = get_logger()
    event_bus = get_event_bus()
    user_repo = UserRepository(session=session)

    return LoginHandler(
        authenticate_handler=AuthenticateRequestHandler(
            identity_provider=get_identity_provider(),
            user_repo=user_repo,
            logger=logger,
            trusted_providers=settings.trusted_oauth_provider_set,
        ),
        reconcile_handler=ReconcileIdentityHandler(
            user_repo=user_repo,
            profile_repo=ProfileRepository(session=session),
            claim_sync=get_role_claim_sync(),
            logger=logger,
        ),
        session_handler=OpenOrRefreshSessionHandler(
            session_repo=SessionRepository(session=session),
            user_repo=user_repo,
            device_enricher=get_device_enricher(),
            location_enricher=get_location_enricher(),
            event_bus=event_bus,
            logger=logger,
            session_ttl=settings.session_ttl,
        ),
        event_bus=event_bus,
    )


async def get_record_failed_login_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RecordFailedLoginHandler":
    """Get RecordFailedLogin handler (request-scoped)."""
    from src.application.commands.handlers.record_failed_login_handler import (
        RecordFailedLoginHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return RecordFailedLoginHandler(
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
        threshold=settings.lockout_threshold,
        duration=settings.lockout_duration,
    )


async def get_change_user_role_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ChangeUserRoleHandler":
    """Get ChangeUserRole handler (request-scoped)."""
    from src.application.commands.handlers.change_user_role_handler import (
        ChangeUserRoleHandler,
    )
    from src.infrastructure.persistence.repositories import (
        ProfileRepository,
        UserRepository,
    )

    return ChangeUserRoleHandler(
        user_repo=UserRepository(session=session),
        profile_repo=ProfileRepository(session=session),
        claim_sync=get_role_claim_sync(),
        event_bus=get_event_bus(),
        logger=get_logger(),
    )


async def get_change_account_status_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ChangeAccountStatusHandler":
    """Get ChangeAccountStatus handler (request-scoped).

    User and session repositories share the request session, so the status
    change and the session revocation commit against the same connection.
    """
    from src.application.commands.handlers.change_account_status_handler import (
        ChangeAccountStatusHandler,
    )
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return ChangeAccountStatusHandler(
        user_repo=UserRepository(session=session),
        session_repo=SessionRepository(session=session),
        event_bus=get_event_bus(),
    )


async def get_current_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "GetCurrentUserHandler":
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )
    from src.infrastructure.persistence.repositories import UserRepository

    return GetCurrentUserHandler(user_repo=UserRepository(session=session))
