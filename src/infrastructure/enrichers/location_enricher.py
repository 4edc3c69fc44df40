"""Location enricher implementation for IP geolocation.

Resolves IP addresses to geographic locations using MaxMind GeoIP2.

Implementation:
    - Uses a GeoLite2-City database for city-level geolocation
    - Fail-open: Returns an IP-only descriptor on any error
    - Private IPs: No lookup (no meaningful location)
    - Disabled when no database path is configured

Reference:
    - MaxMind GeoIP2: https://dev.maxmind.com/geoip/docs/databases/city-and-country
"""

import ipaddress
from pathlib import Path

import geoip2.database
import geoip2.errors

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.session_metadata import LocationDescriptor


class IPLocationEnricher:
    """Location enricher for IP geolocation using MaxMind GeoIP2.

    Implements LocationEnricher protocol (structural typing).

    Behavior:
        - Fail-open: Never blocks session creation
        - Private IPs: Always return the IP only
        - Lazy loading: Database reader initialized on first use

    Args:
        logger: Logger for error/debug messages.
        db_path: Path to GeoLite2-City.mmdb file. If None, geolocation is disabled.
    """

    def __init__(
        self,
        logger: LoggerProtocol,
        db_path: str | None = None,
    ) -> None:
        self._logger = logger
        self._db_path = db_path
        self._reader: geoip2.database.Reader | None = None

    async def enrich(self, ip_address: str | None) -> LocationDescriptor:
        """Resolve IP address to geographic location using GeoIP2.

        Args:
            ip_address: Client IP address (IPv4 or IPv6).

        Returns:
            LocationDescriptor. Only ``ip_address`` is set for private IPs,
            unknown IPs, a missing database, or lookup errors.
        """
        if not ip_address:
            return LocationDescriptor()

        bare = LocationDescriptor(ip_address=ip_address)
        if self._is_private_ip(ip_address) or not self._db_path:
            return bare

        try:
            if self._reader is None:
                self._init_reader()
            if self._reader is None:
                return bare

            response = self._reader.city(ip_address)
            return LocationDescriptor(
                ip_address=ip_address,
                country=response.country.name or None,
                country_code=response.country.iso_code or None,
                city=response.city.name or None,
                region=response.subdivisions.most_specific.name or None,
                timezone=response.location.time_zone or None,
                latitude=response.location.latitude,
                longitude=response.location.longitude,
            )

        except geoip2.errors.AddressNotFoundError:
            self._logger.debug("geoip_address_not_found", ip_address=ip_address)
            return bare

        except Exception as e:
            self._logger.warning(
                "geoip_lookup_failed",
                ip_address=ip_address,
                error_message=str(e),
            )
            return bare

    def close(self) -> None:
        """Release the database reader."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def _init_reader(self) -> None:
        """Initialize GeoIP2 database reader (lazy loading).

        If initialization fails, logs a warning and leaves the reader unset
        (geolocation disabled).
        """
        if not self._db_path:
            return

        db_file = Path(self._db_path)
        if not db_file.exists():
            self._logger.warning("geoip_database_missing", db_path=self._db_path)
            return

        try:
            self._reader = geoip2.database.Reader(str(db_file))
            self._logger.info("geoip_database_loaded", db_path=self._db_path)
        except Exception as e:
            self._logger.warning(
                "geoip_database_load_failed",
                db_path=self._db_path,
                error_message=str(e),
            )
            self._reader = None

    def _is_private_ip(self, ip_address: str) -> bool:
        """Check if IP address is private/reserved.

        Args:
            ip_address: IP address string.

        Returns:
            True if private/reserved or unparseable, False if public.
        """
        try:
            ip = ipaddress.ip_address(ip_address)
        except ValueError:
            return True
        return (
            ip.is_private
            or ip.is_loopback
            or ip.is_reserved
            or ip.is_link_local
            or ip.is_multicast
        )
