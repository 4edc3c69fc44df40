"""Unit tests for ErrorResponseBuilder status and code mapping."""

import json

import pytest
from starlette.requests import Request

from src.core.enums import ErrorCode
from src.core.errors import NotFoundError, ValidationError
from src.domain.enums.verification_failure import VerificationFailure
from src.domain.errors import (
    AccessDeniedError,
    AccountLockedError,
    MissingTokenError,
    SessionExpiredError,
    TokenVerificationError,
)
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder


def _request(path: str = "/api/v1/auth/login") -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "scheme": "http",
            "server": ("testserver", 80),
            "path": path,
            "query_string": b"",
            "headers": [],
        }
    )


def _body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.unit
class TestStatusMapping:
    @pytest.mark.parametrize(
        "error,status_code,code",
        [
            (
                MissingTokenError(code=ErrorCode.TOKEN_MISSING, message="missing"),
                401,
                "TOKEN_MISSING",
            ),
            (TokenVerificationError.from_kind(VerificationFailure.EXPIRED), 401, "TOKEN_EXPIRED"),
            (TokenVerificationError.from_kind(VerificationFailure.REVOKED), 401, "TOKEN_REVOKED"),
            (TokenVerificationError.from_kind(VerificationFailure.MALFORMED), 401, "INVALID_TOKEN"),
            (TokenVerificationError.from_kind(VerificationFailure.UNKNOWN), 401, "INVALID_TOKEN"),
            (
                AccessDeniedError(code=ErrorCode.EMAIL_NOT_VERIFIED, message="verify"),
                403,
                "EMAIL_NOT_VERIFIED",
            ),
            (
                SessionExpiredError(code=ErrorCode.SESSION_EXPIRED, message="idle"),
                401,
                "SESSION_EXPIRED",
            ),
            (
                NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="nope",
                    resource_type="User",
                    resource_id="uid-1",
                ),
                404,
                "USER_NOT_FOUND",
            ),
        ],
    )
    def test_status_and_code(self, error, status_code, code):
        response = ErrorResponseBuilder.from_domain_error(error, _request(), "trace-1")

        body = _body(response)
        assert response.status_code == status_code
        assert body["status"] == status_code
        assert body["code"] == code
        assert body["trace_id"] == "trace-1"
        assert body["instance"] == "/api/v1/auth/login"

    def test_inactive_account_echoes_status(self):
        error = AccessDeniedError(
            code=ErrorCode.ACCOUNT_INACTIVE,
            message="Account is banned.",
            account_status="banned",
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request(), None)

        assert response.status_code == 403
        assert _body(response)["code"] == "BANNED"
        assert "trace_id" not in _body(response)


@pytest.mark.unit
class TestHeaders:
    def test_locked_sets_retry_after(self):
        error = AccountLockedError(
            code=ErrorCode.ACCOUNT_LOCKED, message="locked", retry_after_minutes=12
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request(), None)

        assert response.status_code == 423
        assert response.headers["Retry-After"] == "720"
        assert _body(response)["retry_after_minutes"] == 12

    def test_locked_retry_after_is_at_least_a_minute(self):
        error = AccountLockedError(
            code=ErrorCode.ACCOUNT_LOCKED, message="locked", retry_after_minutes=0
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request(), None)

        assert response.headers["Retry-After"] == "60"

    def test_unauthorized_sets_www_authenticate(self):
        error = TokenVerificationError.from_kind(VerificationFailure.EXPIRED)

        response = ErrorResponseBuilder.from_domain_error(error, _request(), None)

        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_forbidden_has_no_auth_challenge(self):
        error = AccessDeniedError(code=ErrorCode.EMAIL_NOT_VERIFIED, message="verify")

        response = ErrorResponseBuilder.from_domain_error(error, _request(), None)

        assert "WWW-Authenticate" not in response.headers


@pytest.mark.unit
def test_field_errors_listed():
    error = ValidationError(
        code=ErrorCode.INVALID_ROLE, message="Unknown role: owner", field="role"
    )

    body = _body(ErrorResponseBuilder.from_domain_error(error, _request(), None))

    assert body["errors"] == [
        {"field": "role", "code": "invalid_role", "message": "Unknown role: owner"}
    ]

