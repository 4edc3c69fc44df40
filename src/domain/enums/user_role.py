"""User roles.

The internally stored role is authoritative. It is mirrored to the identity
provider as a custom claim so that tokens can carry it, but a role arriving
from end-user input is never accepted.

Usage:
    from src.domain.enums import UserRole

    if user.role == UserRole.ADMIN:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles.

    String Enum:
        Inherits from str for easy serialization into custom claims and
        API payloads.
    """

    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            List of role string values.
        """
        return [role.value for role in cls]

    @classmethod
    def parse(cls, value: str | None) -> "UserRole | None":
        """Parse a role string, returning None for unknown or empty values.

        Args:
            value: Raw role string (e.g. from a token claim).

        Returns:
            Matching UserRole, or None.
        """
        if not value:
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None
