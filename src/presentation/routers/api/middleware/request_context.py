"""Client metadata extracted from inbound requests.

Client IP precedence: X-Forwarded-For (first entry) -> X-Real-IP -> peer
address. The device fingerprint is the User-Agent header truncated to a
bounded length; session lookups key on it, never on the IP address.
"""

from fastapi import Request

from src.core.config import settings


def get_client_ip(request: Request) -> str | None:
    """Best-effort client IP behind a reverse proxy."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return request.client.host if request.client else None


def get_user_agent(request: Request) -> str | None:
    return request.headers.get("User-Agent") or None


def get_device_fingerprint(request: Request) -> str:
    """User-Agent prefix identifying the calling device ("" when absent)."""
    user_agent = request.headers.get("User-Agent") or ""
    return user_agent[: settings.device_fingerprint_max_length]
