"""Session enricher protocols for device and location enrichment.

Enrichers parse user agents and resolve IP addresses to locations. Both are
best-effort: failures return a minimal descriptor, never raise.
"""

from typing import Protocol

from src.domain.value_objects.session_metadata import (
    DeviceDescriptor,
    LocationDescriptor,
)


class DeviceEnricher(Protocol):
    """Device enricher protocol (port) for user agent parsing.

    Behavior:
        - Fail-open: Returns a descriptor with only the fingerprint on errors
        - Non-blocking: Pure string parsing
    """

    async def enrich(self, user_agent: str | None, fingerprint: str) -> DeviceDescriptor:
        """Parse a user agent into a device descriptor.

        Args:
            user_agent: Raw User-Agent header.
            fingerprint: Device fingerprint derived from the header.

        Returns:
            DeviceDescriptor (always carries ``fingerprint``).
        """
        ...


class LocationEnricher(Protocol):
    """Location enricher protocol (port) for IP geolocation.

    Behavior:
        - Fail-open: Returns a descriptor with only the IP on errors
        - Private/loopback addresses are not looked up
    """

    async def enrich(self, ip_address: str | None) -> LocationDescriptor:
        """Resolve an IP address to a location descriptor.

        Args:
            ip_address: Client IP address (IPv4 or IPv6).

        Returns:
            LocationDescriptor (always carries ``ip_address``).
        """
        ...
