"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (console, JSON outside development)
- Database (PostgreSQL via asyncpg, SQLite via aiosqlite in tests)
- Identity provider (firebase-admin App + adapter)
- Role claim propagation worker
- Session enrichers (user agent parsing, GeoIP)

The request-scoped database session lives here too so every repository in a
request shares one transaction.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    import firebase_admin

    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.infrastructure.enrichers import IPLocationEnricher, UserAgentDeviceEnricher
    from src.infrastructure.identity import (
        FirebaseIdentityProvider,
        RoleClaimSyncWorker,
    )


# ============================================================================
# Logging (Application-Scoped)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


# ============================================================================
# Database (Application-Scoped)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Yields:
        Database session for request duration.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


# ============================================================================
# Identity Provider (Application-Scoped)
# ============================================================================


@lru_cache()
def get_firebase_app() -> "firebase_admin.App":
    """Create the firebase-admin App once per process."""
    from src.infrastructure.identity import create_firebase_app

    return create_firebase_app(
        project_id=settings.firebase_project_id,
        credentials_path=settings.firebase_credentials_path,
    )


@lru_cache()
def get_identity_provider() -> "FirebaseIdentityProvider":
    """Get identity provider adapter singleton (app-scoped).

    Returns:
        FirebaseIdentityProvider implementing IdentityProviderProtocol.
    """
    from src.infrastructure.identity import FirebaseIdentityProvider

    return FirebaseIdentityProvider(
        app=get_firebase_app(),
        logger=get_logger(),
        timeout_seconds=settings.idp_timeout_seconds,
    )


@lru_cache()
def get_role_claim_sync() -> "RoleClaimSyncWorker":
    """Get role claim propagation worker singleton (app-scoped).

    Started and stopped by the application lifespan.
    """
    from src.infrastructure.identity import RoleClaimSyncWorker

    return RoleClaimSyncWorker(
        identity_provider=get_identity_provider(),
        logger=get_logger(),
        max_attempts=settings.claim_sync_max_attempts,
        backoff_seconds=settings.claim_sync_backoff_seconds,
        queue_size=settings.claim_sync_queue_size,
    )


# ============================================================================
# Session Enrichers (Application-Scoped)
# ============================================================================


@lru_cache()
def get_device_enricher() -> "UserAgentDeviceEnricher":
    """Get user agent parser singleton (app-scoped)."""
    from src.infrastructure.enrichers import UserAgentDeviceEnricher

    return UserAgentDeviceEnricher(logger=get_logger())


@lru_cache()
def get_location_enricher() -> "IPLocationEnricher":
    """Get GeoIP enricher singleton (app-scoped).

    Geolocation is disabled (IP only) when GEOIP_DB_PATH is unset.
    """
    from src.infrastructure.enrichers import IPLocationEnricher

    return IPLocationEnricher(logger=get_logger(), db_path=settings.geoip_db_path)
