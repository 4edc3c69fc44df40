"""Token verification failure taxonomy."""

from enum import Enum


class VerificationFailure(str, Enum):
    """Why a bearer credential was rejected by the identity provider.

    Values:
        EXPIRED: Credential is past its expiry.
        REVOKED: Credential was valid at issuance but has been revoked.
        MALFORMED: Credential could not be parsed or failed signature checks.
        UNKNOWN: Provider unreachable, timed out, or returned an unexpected
            error. Callers may retry.
    """

    EXPIRED = "expired"
    REVOKED = "revoked"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"
