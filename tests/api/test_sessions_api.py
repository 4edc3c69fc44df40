"""API tests for /api/v1/sessions and /api/v1/admin."""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.queries.handlers.list_sessions_handler import (
    SessionListItem,
    SessionListResult,
)
from src.core.container import (
    get_change_account_status_handler,
    get_change_user_role_handler,
    get_list_sessions_handler,
    get_purge_expired_sessions_handler,
    get_revoke_all_sessions_handler,
    get_revoke_session_handler,
    get_sweep_idle_sessions_handler,
    get_trust_session_device_handler,
)
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Success
from src.domain.enums.account_status import AccountStatus
from src.domain.enums.user_role import UserRole
from src.domain.errors import SessionExpiredError
from tests.api.conftest import AUTH_HEADER, override
from tests.conftest import CHROME_MAC_UA, IPHONE_UA, make_session, make_user


@pytest.fixture
def user(user_repo, authenticated):
    user = make_user()
    user_repo.find_by_subject_or_email.return_value = user
    return user


@pytest.fixture
def admin(user_repo, authenticated):
    admin = make_user(role=UserRole.ADMIN)
    user_repo.find_by_subject_or_email.return_value = admin
    return admin


def _handler(result):
    handler = AsyncMock()
    handler.handle.return_value = result
    return handler


@pytest.mark.api
class TestSessions:
    def test_list_marks_current_device(self, client, user):
        chrome = make_session(user.id)
        iphone = make_session(user.id, fingerprint=IPHONE_UA[:200])
        handler = _handler(
            Success(
                value=SessionListResult(
                    sessions=[
                        SessionListItem(session=chrome, is_current=True),
                        SessionListItem(session=iphone, is_current=False),
                    ],
                    total_count=2,
                )
            )
        )
        override(get_list_sessions_handler, handler)

        response = client.get(
            "/api/v1/sessions", headers={**AUTH_HEADER, "User-Agent": CHROME_MAC_UA}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total_count"] == 2
        assert body["sessions"][0]["id"] == str(chrome.id)
        assert body["sessions"][0]["is_current"] is True
        assert body["sessions"][0]["device_info"] == "Chrome on Mac OS X"
        query = handler.handle.call_args.args[0]
        assert query.user_id == user.id
        assert query.current_fingerprint == CHROME_MAC_UA[:200]

    def test_idle_device_gets_session_expired(self, client, user, session_validator):
        session_validator.handle.return_value = Failure(
            error=SessionExpiredError(
                code=ErrorCode.SESSION_EXPIRED,
                message="Session expired due to inactivity. Please sign in again.",
            )
        )
        handler = _handler(Success(value=SessionListResult(sessions=[], total_count=0)))
        override(get_list_sessions_handler, handler)

        response = client.get("/api/v1/sessions", headers=AUTH_HEADER)

        assert response.status_code == 401
        assert response.json()["code"] == "SESSION_EXPIRED"
        handler.handle.assert_not_awaited()

    def test_never_logged_in_identity(self, client, authenticated):
        override(get_list_sessions_handler, _handler(None))

        response = client.get("/api/v1/sessions", headers=AUTH_HEADER)

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_revoke_one(self, client, user):
        session_id = uuid7()
        handler = _handler(Success(value=None))
        override(get_revoke_session_handler, handler)

        response = client.delete(f"/api/v1/sessions/{session_id}", headers=AUTH_HEADER)

        assert response.status_code == 204
        command = handler.handle.call_args.args[0]
        assert command.session_id == session_id
        assert command.user_id == user.id

    def test_revoke_unknown_session(self, client, user):
        override(
            get_revoke_session_handler,
            _handler(
                Failure(
                    error=NotFoundError(
                        code=ErrorCode.SESSION_NOT_FOUND,
                        message="Session not found.",
                        resource_type="Session",
                        resource_id="x",
                    )
                )
            ),
        )

        response = client.delete(f"/api/v1/sessions/{uuid7()}", headers=AUTH_HEADER)

        assert response.status_code == 404
        assert response.json()["code"] == "SESSION_NOT_FOUND"

    def test_revoke_all(self, client, user):
        override(get_revoke_all_sessions_handler, _handler(Success(value=3)))

        response = client.delete("/api/v1/sessions", headers=AUTH_HEADER)

        assert response.status_code == 200
        assert response.json() == {"message": "All sessions revoked.", "count": 3}

    def test_trust_device(self, client, user):
        session = make_session(user.id)
        session.mark_trusted()
        override(get_trust_session_device_handler, _handler(Success(value=session)))

        response = client.post(
            f"/api/v1/sessions/{session.id}/trust",
            headers={**AUTH_HEADER, "User-Agent": CHROME_MAC_UA},
        )

        assert response.status_code == 200
        assert response.json()["is_trusted"] is True
        assert response.json()["is_current"] is True

    def test_sweep(self, client, user):
        override(get_sweep_idle_sessions_handler, _handler(Success(value=1)))

        response = client.post("/api/v1/sessions/sweeps", headers=AUTH_HEADER)

        assert response.json()["count"] == 1


@pytest.mark.api
class TestAdmin:
    def test_role_change_requires_admin(self, client, user):
        handler = _handler(None)
        override(get_change_user_role_handler, handler)

        response = client.patch(
            f"/api/v1/admin/users/{uuid7()}/role",
            headers=AUTH_HEADER,
            json={"role": "seller"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"
        handler.handle.assert_not_awaited()

    def test_admin_changes_role(self, client, admin):
        target = make_user(role=UserRole.SELLER, email="grace@example.com")
        handler = _handler(Success(value=target))
        override(get_change_user_role_handler, handler)

        response = client.patch(
            f"/api/v1/admin/users/{target.id}/role",
            headers=AUTH_HEADER,
            json={"role": "seller"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "seller"
        command = handler.handle.call_args.args[0]
        assert command.user_id == target.id
        assert command.role == UserRole.SELLER
        assert command.changed_by == "firebase-uid-1"

    def test_unknown_role_rejected(self, client, admin):
        override(get_change_user_role_handler, _handler(None))

        response = client.patch(
            f"/api/v1/admin/users/{uuid7()}/role",
            headers=AUTH_HEADER,
            json={"role": "owner"},
        )

        assert response.status_code == 422

    def test_admin_suspends_user(self, client, admin):
        target = make_user(
            email="grace@example.com", account_status=AccountStatus.SUSPENDED
        )
        target.status_reason = "chargeback"
        handler = _handler(Success(value=target))
        override(get_change_account_status_handler, handler)

        response = client.patch(
            f"/api/v1/admin/users/{target.id}/status",
            headers=AUTH_HEADER,
            json={"account_status": "suspended", "reason": "chargeback"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["account_status"] == "suspended"
        assert body["status_reason"] == "chargeback"
        command = handler.handle.call_args.args[0]
        assert command.user_id == target.id
        assert command.status == AccountStatus.SUSPENDED
        assert command.reason == "chargeback"
        assert command.changed_by == "firebase-uid-1"

    def test_status_change_requires_admin(self, client, user):
        handler = _handler(None)
        override(get_change_account_status_handler, handler)

        response = client.patch(
            f"/api/v1/admin/users/{uuid7()}/status",
            headers=AUTH_HEADER,
            json={"account_status": "banned"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "PERMISSION_DENIED"
        handler.handle.assert_not_awaited()

    def test_status_change_of_unknown_user(self, client, admin):
        missing = uuid7()
        override(
            get_change_account_status_handler,
            _handler(
                Failure(
                    error=NotFoundError(
                        code=ErrorCode.USER_NOT_FOUND,
                        message="User not found.",
                        resource_type="User",
                        resource_id=str(missing),
                    )
                )
            ),
        )

        response = client.patch(
            f"/api/v1/admin/users/{missing}/status",
            headers=AUTH_HEADER,
            json={"account_status": "banned"},
        )

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_unknown_status_rejected(self, client, admin):
        handler = _handler(None)
        override(get_change_account_status_handler, handler)

        response = client.patch(
            f"/api/v1/admin/users/{uuid7()}/status",
            headers=AUTH_HEADER,
            json={"account_status": "deleted"},
        )

        assert response.status_code == 422
        handler.handle.assert_not_awaited()

    def test_purge_expired_sessions(self, client, admin):
        override(get_purge_expired_sessions_handler, _handler(Success(value=7)))

        response = client.delete("/api/v1/admin/sessions/expired", headers=AUTH_HEADER)

        assert response.status_code == 200
        assert response.json() == {"message": "Expired sessions purged.", "count": 7}

    def test_purge_forbidden_for_buyer(self, client, user):
        override(get_purge_expired_sessions_handler, _handler(Success(value=0)))

        response = client.delete("/api/v1/admin/sessions/expired", headers=AUTH_HEADER)

        assert response.status_code == 403
