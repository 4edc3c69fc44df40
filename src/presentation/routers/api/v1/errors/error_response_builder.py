"""Error response builder for RFC 9457 Problem Details.

Maps DomainError values carried in ``Failure`` results onto HTTP responses.

| Condition                       | Status | Code                   |
|---------------------------------|--------|------------------------|
| No/empty credential             | 401    | TOKEN_MISSING          |
| Expired credential              | 401    | TOKEN_EXPIRED          |
| Revoked credential              | 401    | TOKEN_REVOKED          |
| Malformed/unknown credential    | 401    | INVALID_TOKEN          |
| Unverified email (non-OAuth)    | 403    | EMAIL_NOT_VERIFIED     |
| Account locked                  | 423    | ACCOUNT_LOCKED         |
| Account not active              | 403    | account status (BANNED)|
| Session idle-expired            | 401    | SESSION_EXPIRED        |

Exports:
    DomainErrorException: Carries a DomainError out of a FastAPI dependency
    ErrorResponseBuilder: Builds RFC 9457 responses from domain errors
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError
from src.domain.errors import AccessDeniedError, AccountLockedError
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.TOKEN_MISSING: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_REVOKED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.SESSION_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_INACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.SERVICE_KEY_INVALID: status.HTTP_403_FORBIDDEN,
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_REQUIRED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_ROLE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
}

_TITLE_BY_STATUS: dict[int, str] = {
    400: "Bad Request",
    401: "Authentication Required",
    403: "Access Denied",
    404: "Resource Not Found",
    423: "Account Locked",
}


class DomainErrorException(Exception):
    """Raised by dependencies to short-circuit a request with a DomainError."""

    def __init__(self, error: DomainError) -> None:
        super().__init__(error.message)
        self.error = error


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses from domain errors."""

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert a DomainError to an RFC 9457 JSON response.

        Args:
            error: Domain error from a handler Failure.
            request: FastAPI Request object (for instance URL).
            trace_id: Request trace ID.

        Returns:
            JSONResponse with ProblemDetails content.
        """
        status_code = ErrorResponseBuilder.status_code_for(error)
        code = ErrorResponseBuilder.public_code_for(error)

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{code.lower().replace('_', '-')}",
            title=_TITLE_BY_STATUS.get(status_code, "Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            code=code,
            trace_id=trace_id,
        )

        field = getattr(error, "field", None)
        if field:
            problem.errors = [
                ErrorDetail(field=field, code=error.code.value, message=error.message)
            ]

        headers: dict[str, str] | None = None
        if isinstance(error, AccountLockedError):
            problem.retry_after_minutes = error.retry_after_minutes
            headers = {"Retry-After": str(max(error.retry_after_minutes, 1) * 60)}
        elif status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def status_code_for(error: DomainError) -> int:
        """HTTP status for a domain error (500 for unmapped codes)."""
        return _STATUS_BY_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @staticmethod
    def public_code_for(error: DomainError) -> str:
        """Caller-visible code; inactive accounts echo their status (BANNED)."""
        if (
            isinstance(error, AccessDeniedError)
            and error.code == ErrorCode.ACCOUNT_INACTIVE
            and error.account_status
        ):
            return error.account_status.upper()
        return error.code.value.upper()
