"""Role profile repository protocol.

Buyer and seller profile shells are created alongside the user record. The
operation is idempotent: an existing profile is left untouched.
"""

from typing import Protocol

from src.domain.entities.user import User


class ProfileRepository(Protocol):
    """Role profile repository protocol (port)."""

    async def ensure_profile(self, user: User) -> bool:
        """Create the profile shell matching ``user.role`` if missing.

        Admins have no role profile.

        Args:
            user: User whose profile should exist.

        Returns:
            bool: True if a profile was created, False if it already existed
            or the role has no profile.
        """
        ...
