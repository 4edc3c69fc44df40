"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming where practical. The HTTP layer
renders them upper-cased (``ErrorCode.TOKEN_EXPIRED`` -> ``TOKEN_EXPIRED``).

Categories:
- Credential errors (TOKEN_*, INVALID_TOKEN)
- Policy rejections (EMAIL_NOT_VERIFIED, ACCOUNT_LOCKED, ACCOUNT_INACTIVE)
- Session errors (SESSION_*)
- Resource / validation errors
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Credential errors
    TOKEN_MISSING = "token_missing"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_REVOKED = "token_revoked"
    INVALID_TOKEN = "invalid_token"

    # Policy rejections
    EMAIL_NOT_VERIFIED = "email_not_verified"
    ACCOUNT_LOCKED = "account_locked"
    ACCOUNT_INACTIVE = "account_inactive"
    PERMISSION_DENIED = "permission_denied"
    SERVICE_KEY_INVALID = "service_key_invalid"

    # Session errors
    SESSION_EXPIRED = "session_expired"
    SESSION_NOT_FOUND = "session_not_found"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"

    # Validation errors
    EMAIL_REQUIRED = "email_required"
    INVALID_ROLE = "invalid_role"
    VALIDATION_FAILED = "validation_failed"
