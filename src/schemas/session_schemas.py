"""Session management request/response schemas.

Endpoints:
    GET    /api/v1/sessions              - List active sessions
    DELETE /api/v1/sessions/{id}         - Revoke one session
    DELETE /api/v1/sessions              - Revoke all sessions
    POST   /api/v1/sessions/{id}/trust   - Trust a device
    POST   /api/v1/sessions/sweeps       - Expire idle sessions
    DELETE /api/v1/admin/sessions/expired - Purge hard-expired sessions (admin)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.session import Session
from src.domain.enums.device_type import DeviceType


class SessionResponse(BaseModel):
    """Response schema for a single device session."""

    id: UUID = Field(..., description="Session identifier")
    device_type: DeviceType = Field(..., description="Device category")
    device_info: str | None = Field(
        None, description="Parsed device info (e.g., 'Chrome on Mac OS X')"
    )
    ip_address: str | None = Field(None, description="Most recent IP address")
    location: str | None = Field(None, description="Geographic location")
    login_method: str = Field(..., description="How the user signed in")
    is_trusted: bool = Field(False, description="Whether the device is trusted")
    is_current: bool = Field(False, description="Whether this is the calling device")
    created_at: datetime = Field(..., description="When the session was opened")
    last_activity: datetime = Field(..., description="Last activity timestamp")
    expires_at: datetime = Field(..., description="Hard expiry")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "0190f1a2-7b3c-7def-8123-456789abcdef",
                "device_type": "web",
                "device_info": "Chrome on Mac OS X",
                "ip_address": "203.0.113.7",
                "location": "Lagos, Nigeria",
                "login_method": "google",
                "is_trusted": False,
                "is_current": True,
                "created_at": "2024-01-15T10:30:00Z",
                "last_activity": "2024-01-15T14:45:00Z",
                "expires_at": "2024-02-14T10:30:00Z",
            }
        }
    )

    @classmethod
    def from_entity(cls, session: Session, is_current: bool = False) -> "SessionResponse":
        return cls(
            id=session.id,
            device_type=session.device.device_type,
            device_info=session.device.display_name,
            ip_address=session.location.ip_address,
            location=session.location.display_name,
            login_method=session.login_method.value,
            is_trusted=session.is_trusted,
            is_current=is_current,
            created_at=session.created_at,
            last_activity=session.last_activity,
            expires_at=session.expires_at,
        )


class SessionListResponse(BaseModel):
    """Response schema for listing sessions."""

    sessions: list[SessionResponse] = Field(..., description="Active sessions")
    total_count: int = Field(..., description="Number of active sessions")


class SessionCountResponse(BaseModel):
    """Response schema for bulk session operations."""

    message: str = Field(..., description="Outcome")
    count: int = Field(..., description="Sessions affected")
