"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Settings (built from explicit values, never from .env)
- Test client (FastAPI TestClient with get_settings overridden)
- Token helpers for building cookie values
"""

import json
import time
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import Settings, get_settings
from app.environments.base import OAuthTokens


# ---------------------------------------------------------------------------
# SETTINGS
# ---------------------------------------------------------------------------
# Every field is given explicitly so variables from the developer's shell
# (VERCEL_URL, GOOGLE_REDIRECT_URI, ...) cannot leak into a test.

BASE_SETTINGS = {
    "GOOGLE_CLIENT_ID": "test-client-id",
    "GOOGLE_CLIENT_SECRET": "test-client-secret",
    "GOOGLE_REDIRECT_URI": "",
    "NEXT_PUBLIC_GSC_REDIRECT_URI": "",
    "APP_BASE_URL": "http://localhost:8000",
    "VERCEL_URL": "",
    "NODE_ENV": "development",
    "GOOGLE_HTTP_TIMEOUT": 5.0,
}


def make_settings(**overrides) -> Settings:
    """Settings with test defaults; keyword arguments replace single fields."""
    values = {**BASE_SETTINGS, **overrides}
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


# ---------------------------------------------------------------------------
# CLIENT FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """
    Create a test client using the test settings.

    Overrides the get_settings dependency; use override_settings to swap
    in a different configuration inside a test.
    """
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def override_settings(client: TestClient) -> Callable[..., Settings]:
    """
    Replace the settings seen by the app for the rest of the test.

    Example:
        override_settings(GOOGLE_CLIENT_ID="")
    """
    def _override(**overrides) -> Settings:
        new_settings = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: new_settings
        return new_settings

    return _override


# ---------------------------------------------------------------------------
# TOKEN FIXTURES
# ---------------------------------------------------------------------------

def make_tokens(
    access_token: str = "ya29.test-access",
    refresh_token: str = "1//test-refresh",
    expires_in: int = 3600,
) -> OAuthTokens:
    """Token set expiring expires_in seconds from now (negative = expired)."""
    return OAuthTokens(
        access_token=access_token,
        refresh_token=refresh_token,
        expiry_date=int((time.time() + expires_in) * 1000),
        scope="https://www.googleapis.com/auth/webmasters.readonly",
    )


def cookie_value(tokens: OAuthTokens) -> str:
    return json.dumps(tokens.to_dict(), separators=(",", ":"))


@pytest.fixture
def valid_tokens() -> OAuthTokens:
    return make_tokens()


@pytest.fixture
def expired_tokens() -> OAuthTokens:
    return make_tokens(access_token="ya29.stale-access", expires_in=-600)
