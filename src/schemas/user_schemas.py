"""User request/response schemas.

Endpoints:
    GET   /api/v1/users/me                   - Current user
    PATCH /api/v1/admin/users/{id}/role      - Change a user's role (admin)
    PATCH /api/v1/admin/users/{id}/status    - Suspend, ban or reactivate (admin)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities.user import User
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole


class UserResponse(BaseModel):
    """Public view of a user record."""

    id: UUID = Field(..., description="Internal user id")
    subject_id: str = Field(..., description="Identity provider subject id")
    email: str = Field(..., description="Email address")
    name: str = Field(..., description="Display name")
    avatar_url: str | None = Field(None, description="Avatar URL")
    phone: str | None = Field(None, description="Phone number")
    role: UserRole = Field(..., description="Authoritative role")
    is_email_verified: bool = Field(..., description="Email verified at least once")
    is_phone_verified: bool = Field(False, description="Phone verified")
    account_status: str = Field(..., description="active, suspended or banned")
    status_reason: str | None = Field(
        None, description="Why the account was suspended or banned"
    )
    created_at: datetime = Field(..., description="Account creation time")
    last_login: datetime | None = Field(None, description="Most recent login")

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            subject_id=user.subject_id,
            email=user.email,
            name=user.name,
            avatar_url=user.avatar_url,
            phone=user.phone_number,
            role=user.role,
            is_email_verified=user.is_email_verified,
            is_phone_verified=user.is_phone_verified,
            account_status=user.account_status.value,
            status_reason=user.status_reason,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class UserRoleUpdateRequest(BaseModel):
    """Request schema for an administrator role change."""

    role: UserRole = Field(..., description="New role", examples=["seller"])


class AccountStatusUpdateRequest(BaseModel):
    """Request schema for an administrator status change."""

    account_status: AccountStatus = Field(
        ..., description="New account status", examples=["suspended"]
    )
    reason: str | None = Field(
        None,
        max_length=500,
        description="Shown to operators, dropped on reactivation",
        examples=["Chargeback under review"],
    )
