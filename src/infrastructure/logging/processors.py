"""structlog processors shared by the logging adapters.

Processors:
    - redact_sensitive: replaces values stored under sensitive keys with
      "[REDACTED]", recursing through dicts, lists and tuples

Sensitive keys match case-insensitively on substring, so ``access_token``,
``Authorization`` and ``session_cookie`` are all caught.
"""

from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEYS: tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "apikey",
    "api_key",
    "authorization",
    "cookie",
    "session",
    "accountnumber",
    "account_number",
    "routingnumber",
    "ssn",
    "cvv",
    "card",
)


def is_sensitive_key(key: str) -> bool:
    """Whether values under ``key`` must be redacted."""
    lower_key = key.lower()
    return any(marker in lower_key for marker in SENSITIVE_KEYS)


def redact(value: Any) -> Any:
    """Return ``value`` with sensitive entries redacted at any depth."""
    if isinstance(value, dict):
        return {
            key: REDACTED if isinstance(key, str) and is_sensitive_key(key) else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    if isinstance(value, tuple):
        return tuple(redact(item) for item in value)
    return value


def redact_sensitive(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor redacting sensitive keys in the event dict."""
    return redact(event_dict)
