"""Unversioned endpoints for health checks and local diagnostics."""

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.core.config import settings


system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    return {
        "message": settings.app_name,
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check. Does not touch the database or the identity provider."""
    return {"status": "healthy"}


def _policy_snapshot() -> dict[str, Any]:
    return {
        "environment": settings.environment.value,
        "debug": settings.debug,
        "api": {
            "name": settings.app_name,
            "version": settings.app_version,
            "base_url": settings.api_base_url,
            "v1_prefix": settings.api_v1_prefix,
        },
        # Credentials live in the URL
        "database": {"url": "<redacted>", "echo": settings.db_echo},
        "identity_provider": {
            "project_id": settings.firebase_project_id,
            "trusted_oauth_providers": sorted(settings.trusted_oauth_provider_set),
        },
        "lockout": {
            "threshold": settings.lockout_threshold,
            "duration_minutes": settings.lockout_duration_minutes,
        },
        "sessions": {
            "ttl_days": settings.session_ttl_days,
            "idle_timeout_hours": settings.session_idle_timeout_hours,
        },
    }


@system_router.get("/config")
async def get_config() -> JSONResponse:
    """Effective identity policy, served in development only (403 elsewhere)."""
    if not settings.is_development:
        return JSONResponse(
            status_code=403,
            content={"detail": "Config endpoint only available in development"},
        )
    return JSONResponse(content=_policy_snapshot())
