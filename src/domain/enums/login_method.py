"""Login method recorded on each session."""

from enum import Enum


class LoginMethod(str, Enum):
    """How the user signed in at the identity provider."""

    PASSWORD = "password"
    GOOGLE = "google"
    APPLE = "apple"
    FACEBOOK = "facebook"
    EMAIL = "email"

    @classmethod
    def from_sign_in_provider(cls, provider: str | None) -> "LoginMethod":
        """Map an identity provider sign-in provider id to a login method.

        Args:
            provider: Provider id from the token (``google.com``, ``password``...).

        Returns:
            LoginMethod, defaulting to PASSWORD for unknown providers.
        """
        mapping = {
            "google.com": cls.GOOGLE,
            "apple.com": cls.APPLE,
            "facebook.com": cls.FACEBOOK,
            "emaillink": cls.EMAIL,
            "password": cls.PASSWORD,
        }
        return mapping.get((provider or "").lower(), cls.PASSWORD)
