"""Session handler dependency factories.

Request-scoped handler instances for device session management:
- Activity validation (idle expiry)
- Listing, revoking (one or all), trusting
- Idle sweeps and the store-level purge of hard-expired rows
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.container.events import get_event_bus
from src.core.container.infrastructure import get_db_session, get_logger

if TYPE_CHECKING:
    from src.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )
    from src.application.commands.handlers.revoke_session_handler import (
        RevokeSessionHandler,
    )
    from src.application.commands.handlers.session_maintenance_handlers import (
        PurgeExpiredSessionsHandler,
        SweepIdleSessionsHandler,
        TrustSessionDeviceHandler,
    )
    from src.application.commands.handlers.validate_session_activity_handler import (
        ValidateSessionActivityHandler,
    )
    from src.application.queries.handlers.list_sessions_handler import (
        ListSessionsHandler,
    )


async def get_validate_session_activity_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ValidateSessionActivityHandler":
    """Get ValidateSessionActivity handler (request-scoped).

    Used by the session-activity authentication dependency on every
    protected request.
    """
    from src.application.commands.handlers.validate_session_activity_handler import (
        ValidateSessionActivityHandler,
    )
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return ValidateSessionActivityHandler(
        session_repo=SessionRepository(session=session),
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
        logger=get_logger(),
        idle_timeout=settings.session_idle_timeout,
    )


async def get_list_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListSessionsHandler":
    from src.application.queries.handlers.list_sessions_handler import (
        ListSessionsHandler,
    )
    from src.infrastructure.persistence.repositories import SessionRepository

    return ListSessionsHandler(session_repo=SessionRepository(session=session))


async def get_revoke_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeSessionHandler":
    """Get RevokeSession handler (request-scoped)."""
    from src.application.commands.handlers.revoke_session_handler import (
        RevokeSessionHandler,
    )
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return RevokeSessionHandler(
        session_repo=SessionRepository(session=session),
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
    )


async def get_revoke_all_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RevokeAllSessionsHandler":
    """Get RevokeAllSessions handler (request-scoped)."""
    from src.application.commands.handlers.revoke_all_sessions_handler import (
        RevokeAllSessionsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return RevokeAllSessionsHandler(
        session_repo=SessionRepository(session=session),
        user_repo=UserRepository(session=session),
        event_bus=get_event_bus(),
    )


async def get_sweep_idle_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "SweepIdleSessionsHandler":
    from src.application.commands.handlers.session_maintenance_handlers import (
        SweepIdleSessionsHandler,
    )
    from src.infrastructure.persistence.repositories import (
        SessionRepository,
        UserRepository,
    )

    return SweepIdleSessionsHandler(
        session_repo=SessionRepository(session=session),
        user_repo=UserRepository(session=session),
        logger=get_logger(),
        idle_timeout=settings.session_idle_timeout,
    )


async def get_trust_session_device_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "TrustSessionDeviceHandler":
    from src.application.commands.handlers.session_maintenance_handlers import (
        TrustSessionDeviceHandler,
    )
    from src.infrastructure.persistence.repositories import SessionRepository

    return TrustSessionDeviceHandler(session_repo=SessionRepository(session=session))


async def get_purge_expired_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "PurgeExpiredSessionsHandler":
    """Get PurgeExpiredSessions handler (request-scoped, administrators only)."""
    from src.application.commands.handlers.session_maintenance_handlers import (
        PurgeExpiredSessionsHandler,
    )
    from src.infrastructure.persistence.repositories import SessionRepository

    return PurgeExpiredSessionsHandler(
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )
