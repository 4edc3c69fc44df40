"""API v1 routers.

Resource-based endpoints under /api/v1.

Resources:
    /api/v1/auth          - Sign-in, failed sign-in reports, identity
    /api/v1/users         - Current user
    /api/v1/sessions      - Device session management

Admin Resources:
    /api/v1/admin/users/{id}/role   - Role changes
    /api/v1/admin/sessions/expired  - Expired session purge
"""

from fastapi import APIRouter

from src.presentation.routers.api.v1.admin import admin_router
from src.presentation.routers.api.v1.auth import router as auth_router
from src.presentation.routers.api.v1.sessions import router as sessions_router
from src.presentation.routers.api.v1.users import router as users_router

v1_router = APIRouter(prefix="/api/v1")
v1_router.include_router(auth_router)
v1_router.include_router(users_router)
v1_router.include_router(sessions_router)
v1_router.include_router(admin_router)

__all__ = [
    "v1_router",
]
