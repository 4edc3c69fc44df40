"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import LoginResponse, SessionListResponse
"""

from src.schemas.auth_schemas import (
    LoginFailureRequest,
    LoginFailureResponse,
    LoginRequest,
    LoginResponse,
)
from src.schemas.session_schemas import (
    SessionCountResponse,
    SessionListResponse,
    SessionResponse,
)
from src.schemas.user_schemas import UserResponse, UserRoleUpdateRequest

__all__ = [
    "LoginFailureRequest",
    "LoginFailureResponse",
    "LoginRequest",
    "LoginResponse",
    "SessionCountResponse",
    "SessionListResponse",
    "SessionResponse",
    "UserResponse",
    "UserRoleUpdateRequest",
]
