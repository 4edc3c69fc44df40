"""Fixtures for HTTP tests through the FastAPI application.

Handler factories are replaced through ``app.dependency_overrides``, so no
database, identity provider or background worker is touched. The client is
created without entering the lifespan.

Real AuthenticateRequestHandler instances are used wherever the auth policy
itself is under test; only its identity provider and user repository are
doubles.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from src.application.commands.handlers.authenticate_request_handler import (
    AuthenticateRequestHandler,
)
from src.application.dtos.session_dtos import SessionActivity
from src.core.container import (
    get_authenticate_request_handler,
    get_validate_session_activity_handler,
)
from src.core.result import Success
from src.main import app
from tests.conftest import make_claims

AUTH_HEADER = {"Authorization": "Bearer id-token"}
SERVICE_KEY_HEADER = {"X-Service-Key": "test-service-key"}


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def identity_provider():
    provider = Mock()
    provider.verify_token = AsyncMock(return_value=Success(value=make_claims()))
    return provider


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.find_by_subject_or_email.return_value = None
    repo.get_lockout_state.return_value = None
    return repo


@pytest.fixture
def session_validator():
    validator = AsyncMock()
    validator.handle.return_value = Success(value=SessionActivity(session_id=None))
    return validator


@pytest.fixture
def authenticated(identity_provider, user_repo, session_validator, mock_logger):
    """Wire the real request authentication onto the doubles."""
    handler = AuthenticateRequestHandler(
        identity_provider=identity_provider,
        user_repo=user_repo,
        logger=mock_logger,
        trusted_providers=frozenset({"google.com", "apple.com", "facebook.com"}),
    )
    app.dependency_overrides[get_authenticate_request_handler] = lambda: handler
    app.dependency_overrides[get_validate_session_activity_handler] = (
        lambda: session_validator
    )
    return handler


def override(factory, handler) -> None:
    """Serve ``handler`` wherever ``factory`` is a dependency."""
    app.dependency_overrides[factory] = lambda: handler
