"""
Tests for the Analytics endpoints.
"""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from app.environments.base import APIError, AuthenticationError
from app.environments.google.analytics import AnalyticsClient, Ga4DataRow, Ga4Property
from app.environments.google.auth import OAuthFlow
from tests.conftest import cookie_value, make_tokens


class TestGa4Auth:
    """Tests for GET /api/ga4/auth."""

    def test_redirects_to_google(self, client: TestClient):
        response = client.get("/api/ga4/auth", follow_redirects=False)

        assert response.status_code == 302
        query = parse_qs(urlparse(response.headers["location"]).query)
        assert query["redirect_uri"][0] == "http://localhost:8000/api/ga4/callback"
        assert query["scope"][0] == "https://www.googleapis.com/auth/analytics.readonly"
        assert query["access_type"][0] == "offline"
        assert query["include_granted_scopes"][0] == "true"

    def test_missing_client_id(self, client: TestClient, override_settings):
        override_settings(GOOGLE_CLIENT_ID="")

        response = client.get("/api/ga4/auth", follow_redirects=False)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "Server configuration error."
        assert "GOOGLE_CLIENT_ID" in data["details"]
        assert "GOOGLE_CLIENT_SECRET" not in data["details"]

    def test_missing_everything(self, client: TestClient, override_settings):
        override_settings(GOOGLE_CLIENT_ID="", GOOGLE_CLIENT_SECRET="", APP_BASE_URL="")

        response = client.get("/api/ga4/auth", follow_redirects=False)

        assert response.status_code == 500
        assert response.json()["details"] == (
            "The following server environment variables are not configured: "
            "GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, APP_BASE_URL."
        )


class TestGa4Callback:
    """Tests for GET /api/ga4/callback."""

    def test_success_sets_cookie_and_redirects(self, client: TestClient):
        with patch.object(OAuthFlow, "exchange", new=AsyncMock(return_value=make_tokens())) as mock_exchange:
            response = client.get("/api/ga4/callback?code=4/0Ab", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/dashboard"
        mock_exchange.assert_awaited_once_with("4/0Ab")
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("ga4_token=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=2592000" in set_cookie

    def test_provider_error(self, client: TestClient):
        with patch.object(OAuthFlow, "exchange", new=AsyncMock()) as mock_exchange:
            response = client.get("/api/ga4/callback?error=access_denied", follow_redirects=False)

        assert response.status_code == 400
        assert response.json()["details"] == "access_denied"
        mock_exchange.assert_not_awaited()

    def test_missing_code(self, client: TestClient):
        response = client.get("/api/ga4/callback", follow_redirects=False)

        assert response.status_code == 400

    def test_exchange_failure(self, client: TestClient):
        failure = AuthenticationError("invalid_grant", error_code="invalid_grant")

        with patch.object(OAuthFlow, "exchange", new=AsyncMock(side_effect=failure)):
            response = client.get("/api/ga4/callback?code=stale", follow_redirects=False)

        assert response.status_code == 500
        assert "http://localhost:8000/api/ga4/callback" in response.json()["details"]


class TestGa4Query:
    """Tests for POST /api/ga4/query."""

    def test_no_cookie(self, client: TestClient):
        response = client.post("/api/ga4/query", json={"propertyId": "123"})

        assert response.status_code == 401

    def test_missing_property_id(self, client: TestClient):
        client.cookies.set("ga4_token", cookie_value(make_tokens()))

        response = client.post("/api/ga4/query", json={"propertyId": 123})

        assert response.status_code == 400

    def test_returns_formatted_rows(self, client: TestClient):
        client.cookies.set("ga4_token", cookie_value(make_tokens()))
        rows = [Ga4DataRow(pagePath="/blog", sessions=42, totalUsers=30, engagementRate=0.61, conversions=3)]

        with patch.object(AnalyticsClient, "run_page_report", new=AsyncMock(return_value=rows)) as mock_report:
            response = client.post("/api/ga4/query", json={"propertyId": "123"})

        assert response.status_code == 200
        assert response.json() == [
            {"pagePath": "/blog", "sessions": 42, "totalUsers": 30, "engagementRate": 0.61, "conversions": 3}
        ]
        mock_report.assert_awaited_once_with("123")

    @pytest.mark.parametrize("status_code,expected", [(401, 401), (403, 500), (500, 500)])
    def test_upstream_errors(self, client: TestClient, status_code, expected):
        client.cookies.set("ga4_token", cookie_value(make_tokens()))
        failure = APIError("failed", status_code=status_code)

        with patch.object(AnalyticsClient, "run_page_report", new=AsyncMock(side_effect=failure)):
            response = client.post("/api/ga4/query", json={"propertyId": "123"})

        assert response.status_code == expected
        if expected == 401:
            assert response.headers["set-cookie"].startswith("ga4_token=")
        else:
            assert response.json()["error"] == "Failed to query data from Google Analytics."


class TestGa4Properties:
    """Tests for GET /api/ga4/properties."""

    def test_lists_properties(self, client: TestClient):
        client.cookies.set("ga4_token", cookie_value(make_tokens()))
        properties = [Ga4Property(name="properties/1", displayName="Acme - Main site")]

        with patch.object(AnalyticsClient, "list_properties", new=AsyncMock(return_value=properties)):
            response = client.get("/api/ga4/properties")

        assert response.status_code == 200
        assert response.json() == [{"name": "properties/1", "displayName": "Acme - Main site"}]

    def test_no_cookie(self, client: TestClient):
        assert client.get("/api/ga4/properties").status_code == 401


class TestGa4Logout:
    """Tests for POST /api/ga4/logout."""

    def test_clears_cookie(self, client: TestClient):
        response = client.post("/api/ga4/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully."}
        assert "Max-Age=0" in response.headers["set-cookie"]
