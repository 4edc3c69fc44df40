"""Admin API routers.

All routes require the stored admin role.

Resources:
    /api/v1/admin/users/{id}/role    - Role changes
    /api/v1/admin/sessions/expired   - Expired session purge
"""

from fastapi import APIRouter

from src.presentation.routers.api.v1.admin.sessions import router as sessions_router
from src.presentation.routers.api.v1.admin.users import router as users_router

admin_router = APIRouter(prefix="/admin")
admin_router.include_router(users_router)
admin_router.include_router(sessions_router)

__all__ = ["admin_router"]
