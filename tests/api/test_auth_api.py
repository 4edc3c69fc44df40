"""API tests for /api/v1/auth and the request authentication policy."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.application.commands.handlers.record_failed_login_handler import (
    RecordFailedLoginHandler,
)
from src.application.dtos.auth_dtos import LoginResult
from src.core.container import (
    get_current_user_handler,
    get_login_handler,
    get_record_failed_login_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Success
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.verification_failure import VerificationFailure
from src.domain.errors import AccountLockedError, TokenVerificationError
from src.domain.value_objects.lockout_state import LockoutState
from src.core.config import settings
from tests.api.conftest import AUTH_HEADER, SERVICE_KEY_HEADER, override
from tests.conftest import CHROME_MAC_UA, make_claims, make_session, make_user


def _not_found():
    return Failure(
        error=NotFoundError(
            code=ErrorCode.USER_NOT_FOUND,
            message="User not found. Please sign in first.",
            resource_type="User",
            resource_id="firebase-uid-1",
        )
    )


@pytest.mark.api
class TestLogin:
    def test_new_user_welcome(self, client):
        user = make_user()
        handler = AsyncMock()
        handler.handle.return_value = Success(
            value=LoginResult(user=user, session=make_session(user.id), is_new_user=True)
        )
        override(get_login_handler, handler)

        response = client.post(
            "/api/v1/auth/login",
            headers={**AUTH_HEADER, "User-Agent": CHROME_MAC_UA},
            json={"name": "Ada"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Welcome!"
        assert body["is_new_user"] is True
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["role"] == "buyer"
        command = handler.handle.call_args.args[0]
        assert command.credential == "id-token"
        assert command.name_hint == "Ada"
        assert command.device_fingerprint == CHROME_MAC_UA[:200]

    def test_returning_user_without_body(self, client):
        user = make_user()
        handler = AsyncMock()
        handler.handle.return_value = Success(
            value=LoginResult(user=user, session=make_session(user.id), is_new_user=False)
        )
        override(get_login_handler, handler)

        response = client.post("/api/v1/auth/login", headers=AUTH_HEADER)

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome back!"

    def test_role_hint_is_passed_through_not_applied(self, client):
        user = make_user()
        handler = AsyncMock()
        handler.handle.return_value = Success(
            value=LoginResult(user=user, session=make_session(user.id), is_new_user=True)
        )
        override(get_login_handler, handler)

        response = client.post(
            "/api/v1/auth/login", headers=AUTH_HEADER, json={"role": "admin"}
        )

        assert response.json()["user"]["role"] == "buyer"
        assert handler.handle.call_args.args[0].role_hint.value == "admin"

    def test_locked_account(self, client):
        handler = AsyncMock()
        handler.handle.return_value = Failure(
            error=AccountLockedError(
                code=ErrorCode.ACCOUNT_LOCKED,
                message="Account is temporarily locked. Try again in 9 minutes.",
                retry_after_minutes=9,
            )
        )
        override(get_login_handler, handler)

        response = client.post("/api/v1/auth/login", headers=AUTH_HEADER)

        assert response.status_code == 423
        assert response.headers["Retry-After"] == "540"
        assert response.json()["code"] == "ACCOUNT_LOCKED"
        assert response.json()["retry_after_minutes"] == 9

    def test_expired_token(self, client):
        handler = AsyncMock()
        handler.handle.return_value = Failure(
            error=TokenVerificationError.from_kind(VerificationFailure.EXPIRED)
        )
        override(get_login_handler, handler)

        response = client.post("/api/v1/auth/login", headers=AUTH_HEADER)

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_EXPIRED"
        assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.api
class TestLoginFailures:
    def test_always_accepted(self, client):
        handler = AsyncMock()
        override(get_record_failed_login_handler, handler)

        response = client.post(
            "/api/v1/auth/login-failures",
            headers=SERVICE_KEY_HEADER,
            json={"email": "nobody@example.com", "reason": "wrong_password"},
        )

        assert response.status_code == 202
        command = handler.handle.call_args.args[0]
        assert command.email == "nobody@example.com"
        assert command.reason == "wrong_password"

    def test_invalid_email_rejected(self, client):
        override(get_record_failed_login_handler, AsyncMock())

        response = client.post(
            "/api/v1/auth/login-failures",
            headers=SERVICE_KEY_HEADER,
            json={"email": "nope"},
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_FAILED"

    @pytest.mark.parametrize(
        "headers",
        [{}, {"X-Service-Key": "guessed"}],
        ids=["anonymous", "wrong-key"],
    )
    def test_untrusted_caller_cannot_touch_lockout(
        self, client, headers, user_repo, mock_event_bus, mock_logger
    ):
        user_repo.find_by_email.return_value = make_user()
        override(
            get_record_failed_login_handler,
            RecordFailedLoginHandler(
                user_repo=user_repo, event_bus=mock_event_bus, logger=mock_logger
            ),
        )

        for _ in range(5):
            response = client.post(
                "/api/v1/auth/login-failures",
                headers=headers,
                json={"email": "ada@example.com"},
            )
            assert response.status_code == 403
            assert response.json()["code"] == "SERVICE_KEY_INVALID"

        user_repo.find_by_email.assert_not_awaited()
        user_repo.save_lockout_state.assert_not_awaited()

    def test_reports_refused_without_configured_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "login_failure_report_key", None)
        handler = AsyncMock()
        override(get_record_failed_login_handler, handler)

        response = client.post(
            "/api/v1/auth/login-failures",
            headers=SERVICE_KEY_HEADER,
            json={"email": "ada@example.com"},
        )

        assert response.status_code == 403
        handler.handle.assert_not_awaited()


@pytest.mark.api
class TestRequestAuthentication:
    """Auth policy exercised through GET /api/v1/users/me."""

    @pytest.fixture(autouse=True)
    def _current_user(self, authenticated):
        handler = AsyncMock()
        handler.handle.return_value = _not_found()
        override(get_current_user_handler, handler)
        self.current_user = handler

    def test_missing_bearer(self, client):
        response = client.get("/api/v1/users/me")

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_MISSING"

    def test_revoked_token(self, client, identity_provider):
        identity_provider.verify_token.return_value = Failure(
            error=TokenVerificationError.from_kind(VerificationFailure.REVOKED)
        )

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        assert response.status_code == 401
        assert response.json()["code"] == "TOKEN_REVOKED"

    def test_unverified_password_user_rejected(self, client, identity_provider):
        identity_provider.verify_token.return_value = Success(
            value=make_claims(email_verified=False, sign_in_provider="password")
        )

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        assert response.status_code == 403
        assert response.json()["code"] == "EMAIL_NOT_VERIFIED"

    def test_unverified_google_user_accepted(self, client, identity_provider):
        identity_provider.verify_token.return_value = Success(
            value=make_claims(email_verified=False, sign_in_provider="google.com")
        )

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        # Authenticated, but never logged in
        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_locked_user(self, client, user_repo):
        user = make_user()
        user_repo.find_by_subject_or_email.return_value = user
        user_repo.get_lockout_state.return_value = LockoutState(
            failed_login_attempts=5,
            locked_until=datetime.now(UTC) + timedelta(minutes=10),
        )

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        assert response.status_code == 423
        assert int(response.headers["Retry-After"]) in (540, 600)

    def test_banned_user(self, client, user_repo):
        user_repo.find_by_subject_or_email.return_value = make_user(
            account_status=AccountStatus.BANNED
        )

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        assert response.status_code == 403
        assert response.json()["code"] == "BANNED"

    def test_known_user_profile(self, client, user_repo):
        user = make_user()
        user_repo.find_by_subject_or_email.return_value = user
        self.current_user.handle.return_value = Success(value=user)

        response = client.get("/api/v1/users/me", headers=AUTH_HEADER)

        assert response.status_code == 200
        assert response.json()["id"] == str(user.id)
        assert self.current_user.handle.call_args.args[0].subject_id == "firebase-uid-1"


@pytest.mark.api
class TestIdentityEndpoint:
    def test_anonymous(self, client, authenticated):
        response = client.get("/api/v1/auth/identity")

        assert response.json() == {"authenticated": False}

    def test_invalid_token_is_anonymous(self, client, authenticated, identity_provider):
        identity_provider.verify_token.return_value = Failure(
            error=TokenVerificationError.from_kind(VerificationFailure.MALFORMED)
        )

        response = client.get("/api/v1/auth/identity", headers=AUTH_HEADER)

        assert response.status_code == 200
        assert response.json() == {"authenticated": False}

    def test_authenticated(self, client, authenticated):
        response = client.get("/api/v1/auth/identity", headers=AUTH_HEADER)

        body = response.json()
        assert body["authenticated"] is True
        assert body["subject_id"] == "firebase-uid-1"
        assert body["role"] == "buyer"
