"""Read-side requests about a user's device sessions.

Queries are frozen and carry no behavior; their handlers only read.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListUserSessions:
    """Active, unexpired sessions of ``user_id``, newest activity first.

    ``current_fingerprint`` is the caller's own device fingerprint; the
    matching session is flagged ``is_current`` in the result.
    """

    user_id: UUID
    current_fingerprint: str | None = None
