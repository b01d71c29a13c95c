"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
The environment is forced to ``test`` before anything reads settings, which
turns off simulated latency and rate limiting.
"""

import os

os.environ["MOCKAPI_ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from shared.config import Settings, get_settings
from shared.models import AuthUser


ADMIN_ID = "user_1"
MANAGER_ID = "user_2"
MEMBER_ID = "user_4"
DEMO_USER_ID = "user_5"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Test settings: no delay, no rate limiting, token verification on."""
    return Settings(environment="test", auth_mode="service")


@pytest.fixture
def app(settings: Settings):
    """A fresh application with freshly seeded data."""
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def container(app):
    return app.state.container


def create_test_token(app, user_id: str) -> str:
    """
    Issue a real access token for a seeded user.

    Args:
        app: Application whose container holds the user
        user_id: Id of a seeded user

    Returns:
        JWT token string
    """
    container = app.state.container
    user: AuthUser = container.user_repository.find_by_id(user_id).to_auth_user()
    return container.auth.generate_token(user)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for(app):
    """Build auth headers for any seeded user id."""
    return lambda user_id: bearer(create_test_token(app, user_id))


@pytest.fixture
def admin_headers(app) -> dict[str, str]:
    return bearer(create_test_token(app, ADMIN_ID))


@pytest.fixture
def manager_headers(app) -> dict[str, str]:
    return bearer(create_test_token(app, MANAGER_ID))


@pytest.fixture
def user_headers(app) -> dict[str, str]:
    """Headers for the seeded non-admin demo user."""
    return bearer(create_test_token(app, DEMO_USER_ID))


@pytest.fixture
def member_headers(app) -> dict[str, str]:
    return bearer(create_test_token(app, MEMBER_ID))
