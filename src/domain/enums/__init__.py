"""Domain enums for the identity core.

Available Enums:
    - UserRole: buyer, seller, admin
    - AccountStatus: active, suspended, banned
    - DeviceType: Session device classification
    - LoginMethod: How the user signed in
    - VerificationFailure: Token verification failure taxonomy
"""

from src.domain.enums.account_status import AccountStatus
from src.domain.enums.device_type import DeviceType
from src.domain.enums.login_method import LoginMethod
from src.domain.enums.user_role import UserRole
from src.domain.enums.verification_failure import VerificationFailure

__all__ = [
    "AccountStatus",
    "DeviceType",
    "LoginMethod",
    "UserRole",
    "VerificationFailure",
]
