"""RFC 9457 Problem Details for HTTP APIs.

Pydantic models for structured error responses. Identity errors add a
machine-readable ``code`` member (TOKEN_EXPIRED, ACCOUNT_LOCKED...) that
clients branch on.

RFC 9457: https://www.rfc-editor.org/rfc/rfc9457

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 9457 error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error (validation failures)."""

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details response.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: Request path of this occurrence
        code: Machine-readable error code (extension member)
        errors: Field-specific errors (validation failures)
        trace_id: Request trace ID for support
        retry_after_minutes: Minutes until a locked account may retry

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://api.example.com/errors/token-expired",
        ...     title="Authentication Required",
        ...     status=401,
        ...     detail="Token has expired. Please sign in again.",
        ...     instance="/api/v1/users/me",
        ...     code="TOKEN_EXPIRED",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://api.example.com/errors/account-locked"],
    )
    title: str = Field(..., description="Short, human-readable summary", examples=["Account Locked"])
    status: int = Field(..., description="HTTP status code", examples=[423])
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Account is temporarily locked. Try again in 12 minutes."],
    )
    instance: str = Field(
        ...,
        description="Request path of this occurrence",
        examples=["/api/v1/auth/login"],
    )
    code: str | None = Field(
        None,
        description="Machine-readable error code",
        examples=["ACCOUNT_LOCKED"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
    retry_after_minutes: int | None = Field(
        None,
        description="Minutes until a locked account may sign in again",
    )
