"""Device enricher implementation using user-agents library.

Parses user agent strings to extract device, browser, and OS information.
Implements DeviceEnricher protocol with fail-open behavior.
"""

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.enums.device_type import DeviceType
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.session_metadata import DeviceDescriptor


class UserAgentDeviceEnricher:
    """Device enricher using the user-agents library.

    Implements DeviceEnricher protocol (structural typing).

    Behavior:
        - Fail-open: Returns a fingerprint-only descriptor on parse errors
        - Non-blocking: Pure string parsing (<1ms)
        - Best-effort: Unknown agents return partial data
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def enrich(self, user_agent: str | None, fingerprint: str) -> DeviceDescriptor:
        """Parse user agent string to extract device information.

        Args:
            user_agent: Raw user agent string from HTTP header.
            fingerprint: Device fingerprint derived from the header.

        Returns:
            DeviceDescriptor with parsed device info.
        """
        if not user_agent:
            return DeviceDescriptor(fingerprint=fingerprint)

        try:
            ua: UserAgent = parse_user_agent(user_agent)
            return DeviceDescriptor(
                fingerprint=fingerprint,
                device_type=self._determine_device_type(ua),
                user_agent=user_agent,
                browser=_known(ua.browser.family),
                browser_version=ua.browser.version_string or None,
                os=_known(ua.os.family),
                os_version=ua.os.version_string or None,
                model=_known(ua.device.model),
            )
        except Exception as e:
            self._logger.warning(
                "user_agent_parse_failed",
                user_agent=user_agent[:100],
                error_message=str(e),
            )
            return DeviceDescriptor(fingerprint=fingerprint, user_agent=user_agent)

    def _determine_device_type(self, ua: UserAgent) -> DeviceType:
        """Determine device type from parsed user agent.

        Args:
            ua: Parsed UserAgent object.

        Returns:
            DeviceType. Phones and tablets resolve to IOS/ANDROID by OS;
            PCs are WEB when a browser was identified, DESKTOP otherwise.
        """
        os_family = (ua.os.family or "").lower()
        if ua.is_mobile or ua.is_tablet:
            if os_family == "ios":
                return DeviceType.IOS
            if os_family == "android":
                return DeviceType.ANDROID
            return DeviceType.TABLET if ua.is_tablet else DeviceType.MOBILE
        if ua.is_pc:
            if _known(ua.browser.family):
                return DeviceType.WEB
            return DeviceType.DESKTOP
        return DeviceType.WEB


def _known(value: str | None) -> str | None:
    """user-agents reports unrecognised fields as "Other"."""
    if not value or value == "Other":
        return None
    return value
