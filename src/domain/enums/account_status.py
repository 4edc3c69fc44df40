"""Account status.

Only ACTIVE accounts may authenticate. Non-active statuses are echoed back to
the caller as the rejection code.
"""

from enum import Enum


class AccountStatus(str, Enum):
    """Lifecycle status of a user account."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    BANNED = "banned"
