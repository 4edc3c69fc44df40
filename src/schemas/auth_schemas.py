"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints:
    POST /api/v1/auth/login           - Sign in with an identity provider token
    POST /api/v1/auth/login-failures  - Report a failed provider sign-in
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.schemas.user_schemas import UserResponse


# =============================================================================
# Login
# =============================================================================


class LoginRequest(BaseModel):
    """Request schema for login.

    POST /api/v1/auth/login
    The bearer token travels in the Authorization header. Both fields are
    hints: ``name`` seeds the display name of a new account and ``role`` is
    never honoured from this endpoint.
    """

    name: str | None = Field(
        None,
        max_length=200,
        description="Display name to use when the account is created",
        examples=["Ada Lovelace"],
    )
    role: str | None = Field(
        None,
        max_length=32,
        description="Requested role (ignored; roles change only via admin)",
        examples=["buyer"],
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Ada Lovelace"}}
    )


class LoginResponse(BaseModel):
    """Response schema for a successful login (200 OK).

    Never carries credentials, counters or lock timestamps.
    """

    success: bool = Field(True, description="Always true on 200")
    message: str = Field(..., description="Human-readable outcome")
    user: UserResponse = Field(..., description="Signed-in user")
    is_new_user: bool = Field(..., description="Whether this login created the account")


# =============================================================================
# Failed sign-in reports
# =============================================================================


class LoginFailureRequest(BaseModel):
    """Request schema for reporting a failed sign-in.

    POST /api/v1/auth/login-failures
    Returns: 202 Accepted (whether or not the email is known)
    """

    email: EmailStr = Field(
        ...,
        description="Email the sign-in was attempted for",
        examples=["user@example.com"],
    )
    reason: str = Field(
        "invalid_credentials",
        max_length=64,
        description="Provider error reported to the client",
        examples=["invalid_credentials"],
    )


class LoginFailureResponse(BaseModel):
    """Response schema for a failed sign-in report (202 Accepted)."""

    message: str = Field(
        "Sign-in failure recorded.",
        description="Identical for known and unknown emails",
    )
