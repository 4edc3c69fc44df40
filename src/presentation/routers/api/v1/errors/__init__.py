"""RFC 9457 error responses for the presentation layer.

Exports:
    DomainErrorException: Carries a DomainError out of a dependency
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 error response schema
    ErrorResponseBuilder: Builds Problem Details from domain errors
    register_exception_handlers: Register global exception handlers with FastAPI
"""

from src.presentation.routers.api.v1.errors.error_response_builder import (
    DomainErrorException,
    ErrorResponseBuilder,
)
from src.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

__all__ = [
    "DomainErrorException",
    "ErrorDetail",
    "ErrorResponseBuilder",
    "ProblemDetails",
    "register_exception_handlers",
]
