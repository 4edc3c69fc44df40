"""Validated identity claim set.

Read-only output of the token verification gateway. Only selected fields are
copied into the user record during reconciliation; the claim set itself is
never persisted.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidatedClaimSet:
    """Decoded, verified attributes of a bearer credential.

    Attributes:
        subject_id: Stable identifier assigned by the identity provider.
        email: Email address from the token (may be None for phone sign-in).
        email_verified: Whether the provider considers the email verified.
        name: Display name claim.
        picture: Avatar URL claim.
        phone_number: Phone number claim (E.164), set for phone sign-in.
        sign_in_provider: Provider id (``password``, ``google.com``...).
        role: Role custom claim echoed back from an earlier propagation.
    """

    subject_id: str
    email: str | None = None
    email_verified: bool = False
    name: str | None = None
    picture: str | None = None
    phone_number: str | None = None
    sign_in_provider: str | None = None
    role: str | None = None

    def is_trusted_oauth(self, trusted_providers: frozenset[str]) -> bool:
        """Whether the sign-in provider vouches for the email address."""
        return (self.sign_in_provider or "").lower() in trusted_providers
