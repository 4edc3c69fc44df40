"""User queries (CQRS read operations)."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class GetCurrentUser:
    """Get the user record behind an authenticated identity.

    Attributes:
        subject_id: Identity provider subject id.
        email: Email from the verified claims.
    """

    subject_id: str
    email: str | None = None
