"""Data Transfer Objects (DTOs) for application layer.

DTOs are response/result dataclasses returned by command and query handlers.
They transfer data from the application layer to the presentation layer.

Categories:
    - auth_dtos: Authentication and reconciliation results
    - session_dtos: Session lifecycle results

Usage:
    from src.application.dtos import AuthenticatedIdentity, ReconciliationResult

Note:
    DTOs are NOT the same as API schemas (Pydantic models in presentation layer).
"""

from src.application.dtos.auth_dtos import (
    AuthenticatedIdentity,
    LoginResult,
    ReconciliationResult,
)
from src.application.dtos.session_dtos import SessionActivity, SessionOpenResult

__all__ = [
    "AuthenticatedIdentity",
    "LoginResult",
    "ReconciliationResult",
    "SessionActivity",
    "SessionOpenResult",
]
