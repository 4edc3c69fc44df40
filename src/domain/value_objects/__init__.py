"""Domain value objects.

Immutable value objects used by the identity core.
"""

from src.domain.value_objects.claims import ValidatedClaimSet
from src.domain.value_objects.lockout_state import (
    LockoutState,
    is_locked,
    minutes_remaining,
    record_failure,
)
from src.domain.value_objects.session_metadata import (
    ActiveSessionRef,
    DeviceDescriptor,
    LocationDescriptor,
)

__all__ = [
    "ActiveSessionRef",
    "DeviceDescriptor",
    "LocationDescriptor",
    "LockoutState",
    "ValidatedClaimSet",
    "is_locked",
    "minutes_remaining",
    "record_failure",
]
