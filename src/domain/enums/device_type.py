"""Device type classification for sessions."""

from enum import Enum


class DeviceType(str, Enum):
    """Coarse device class derived from the User-Agent."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    DESKTOP = "desktop"
    MOBILE = "mobile"
    TABLET = "tablet"
