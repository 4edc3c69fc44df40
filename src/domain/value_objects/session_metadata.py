"""Session device and location descriptors."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.enums.device_type import DeviceType


@dataclass(frozen=True, slots=True, kw_only=True)
class DeviceDescriptor:
    """Device the session was opened from.

    Attributes:
        fingerprint: Stable device key (bounded User-Agent prefix). Sessions
            are deduplicated on (user, fingerprint).
        device_type: Coarse device class.
        user_agent: Full User-Agent header.
        browser: Browser family ("Chrome").
        browser_version: Browser version string.
        os: Operating system family ("Mac OS X").
        os_version: Operating system version string.
        model: Hardware model when known ("iPhone").
    """

    fingerprint: str
    device_type: DeviceType = DeviceType.WEB
    user_agent: str | None = None
    browser: str | None = None
    browser_version: str | None = None
    os: str | None = None
    os_version: str | None = None
    model: str | None = None

    @property
    def display_name(self) -> str | None:
        """Short label such as "Chrome on Mac OS X"."""
        if self.browser and self.os:
            return f"{self.browser} on {self.os}"
        return self.browser or self.os


@dataclass(frozen=True, slots=True, kw_only=True)
class LocationDescriptor:
    """Network location of the request.

    Geo fields are filled by best-effort enrichment and may all be None.
    """

    ip_address: str | None = None
    country: str | None = None
    country_code: str | None = None
    city: str | None = None
    region: str | None = None
    timezone: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def display_name(self) -> str | None:
        """Short label such as "Berlin, DE"."""
        parts = [p for p in (self.city, self.country_code or self.country) if p]
        return ", ".join(parts) if parts else None


@dataclass(frozen=True, slots=True, kw_only=True)
class ActiveSessionRef:
    """Lightweight session reference kept on the user record."""

    session_id: UUID
    device_type: DeviceType
    last_activity: datetime
