"""Session domain errors."""

from dataclasses import dataclass

from src.core.errors import AuthenticationError


@dataclass(frozen=True, slots=True, kw_only=True)
class SessionExpiredError(AuthenticationError):
    """Session was force-expired after exceeding the idle timeout."""

    pass
