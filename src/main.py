"""
Main FastAPI application entry point.

Builds the FastAPI application: middleware, exception handlers, routers and
the lifespan that owns long-lived resources (role claim worker, GeoIP reader,
database engine, firebase-admin App).
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import settings
from src.core.container import (
    get_database,
    get_firebase_app,
    get_location_enricher,
    get_logger,
    get_role_claim_sync,
)
from src.infrastructure.identity import close_firebase_app
from src.presentation.routers import system_router
from src.presentation.routers.api.middleware.trace_middleware import TraceMiddleware
from src.presentation.routers.api.v1 import v1_router
from src.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Startup:
        - Create tables when DB_CREATE_TABLES is set (dev/test only)
        - Start the role claim propagation worker (skipped in testing)

    Shutdown:
        - Drain and stop the worker
        - Close the GeoIP reader, the database engine and the firebase App

    Args:
        app: FastAPI application instance.

    Yields:
        None during application lifetime.
    """
    logger = get_logger()
    database = get_database()

    if settings.db_create_tables:
        await database.create_all()

    claim_sync = None
    if not settings.is_testing:
        claim_sync = get_role_claim_sync()
        await claim_sync.start()

    logger.info(
        "application_started",
        environment=settings.environment.value,
        version=settings.app_version,
    )

    yield

    if claim_sync is not None:
        await claim_sync.stop()
        close_firebase_app(get_firebase_app())

    get_location_enricher().close()
    await database.close()
    logger.info("application_stopped")


# Initialize FastAPI application with settings and lifespan
app = FastAPI(
    title=settings.app_name,
    description="Identity, account state and device session core",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
    lifespan=lifespan,
)

# Wire trace middleware (request correlation)
app.add_middleware(TraceMiddleware)

# Register global exception handlers (RFC 9457 error responses)
register_exception_handlers(app)

# System endpoints (/, /health, /config)
app.include_router(system_router)

# API v1 routers (RESTful resource-based endpoints)
app.include_router(v1_router)
