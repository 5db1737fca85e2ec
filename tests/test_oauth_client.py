"""
Tests for the Google OAuth client and the parameterized flow.

HTTP calls to Google are intercepted with respx.
"""

import time
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import respx

from app.environments.base import AuthenticationError, OAuthTokens, TokenExpiredError
from app.environments.google.auth import (
    ANALYTICS_SCOPES,
    GA4_COOKIE_NAME,
    SEARCH_CONSOLE_SCOPES,
    GoogleAuthClient,
    OAuthFlow,
    OAuthFlowConfig,
)


TOKEN_URL = GoogleAuthClient.TOKEN_URL


def make_client() -> GoogleAuthClient:
    return GoogleAuthClient(
        client_id="client-123",
        client_secret="secret-456",
        redirect_uri="https://app.example.com/gsc-auth-complete",
        timeout=5.0,
    )


class TestAuthorizationUrl:
    """Tests for get_authorization_url."""

    def test_includes_offline_access_and_scopes(self):
        url = make_client().get_authorization_url(SEARCH_CONSOLE_SCOPES, prompt="consent")
        query = parse_qs(urlparse(url).query)

        assert url.startswith(GoogleAuthClient.AUTHORIZATION_URL)
        assert query["client_id"][0] == "client-123"
        assert query["redirect_uri"][0] == "https://app.example.com/gsc-auth-complete"
        assert query["response_type"][0] == "code"
        assert query["access_type"][0] == "offline"
        assert query["scope"][0] == "https://www.googleapis.com/auth/webmasters.readonly"
        assert query["prompt"][0] == "consent"
        assert query["include_granted_scopes"][0] == "true"
        assert "state" not in query

    def test_requires_redirect_uri(self):
        client = GoogleAuthClient(client_id="a", client_secret="b")

        with pytest.raises(ValueError):
            client.get_authorization_url(ANALYTICS_SCOPES)


class TestExchangeCode:
    """Tests for exchange_code_for_tokens."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_exchange_posts_form_and_returns_tokens(self):
        route = respx.post(TOKEN_URL).respond(
            200,
            json={
                "access_token": "ya29.new",
                "expires_in": 3599,
                "refresh_token": "1//refresh",
                "scope": "https://www.googleapis.com/auth/webmasters.readonly",
                "token_type": "Bearer",
            },
        )

        before = time.time() * 1000
        tokens = await make_client().exchange_code_for_tokens("4/0Ab-code")

        assert route.called is True
        form = parse_qs(route.calls.last.request.content.decode())
        assert form["code"][0] == "4/0Ab-code"
        assert form["grant_type"][0] == "authorization_code"
        assert form["redirect_uri"][0] == "https://app.example.com/gsc-auth-complete"

        assert tokens.access_token == "ya29.new"
        assert tokens.refresh_token == "1//refresh"
        assert tokens.expiry_date >= before + 3599 * 1000 - 1000

    @pytest.mark.asyncio
    @respx.mock
    async def test_exchange_failure_carries_google_error_code(self):
        respx.post(TOKEN_URL).respond(
            400,
            json={"error": "redirect_uri_mismatch", "error_description": "Bad Request"},
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await make_client().exchange_code_for_tokens("code")

        assert exc_info.value.error_code == "redirect_uri_mismatch"
        assert "Bad Request" in str(exc_info.value)

    @pytest.mark.asyncio
    @respx.mock
    async def test_exchange_network_error(self):
        respx.post(TOKEN_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

        with pytest.raises(AuthenticationError):
            await make_client().exchange_code_for_tokens("code")

    @pytest.mark.parametrize("kwargs", [
        {"text": "<html>not json</html>"},
        {"json": {"token_type": "Bearer"}},
        {"json": ["ya29.a"]},
    ])
    @pytest.mark.asyncio
    @respx.mock
    async def test_exchange_unreadable_success_response(self, kwargs):
        respx.post(TOKEN_URL).respond(200, **kwargs)

        with pytest.raises(AuthenticationError):
            await make_client().exchange_code_for_tokens("code")


class TestRefresh:
    """Tests for refresh_access_token."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_refresh_keeps_existing_refresh_token(self):
        respx.post(TOKEN_URL).respond(200, json={"access_token": "ya29.fresh", "expires_in": 3600})

        tokens = await make_client().refresh_access_token("1//keep-me")

        assert tokens.access_token == "ya29.fresh"
        assert tokens.refresh_token == "1//keep-me"

    @pytest.mark.asyncio
    @respx.mock
    async def test_refresh_failure_raises_token_expired(self):
        respx.post(TOKEN_URL).respond(400, json={"error": "invalid_grant"})

        with pytest.raises(TokenExpiredError):
            await make_client().refresh_access_token("1//revoked")

    @pytest.mark.asyncio
    @respx.mock
    async def test_refresh_unreadable_success_response(self):
        respx.post(TOKEN_URL).respond(200, json={"expires_in": 3600})

        with pytest.raises(TokenExpiredError):
            await make_client().refresh_access_token("1//r")


class TestOAuthFlow:
    """Tests for the parameterized flow."""

    def make_flow(self) -> OAuthFlow:
        config = OAuthFlowConfig(
            provider="ga4",
            client_id="client-123",
            client_secret="secret-456",
            redirect_uri="https://seo.example.com/api/ga4/callback",
            scopes=ANALYTICS_SCOPES,
            cookie_name=GA4_COOKIE_NAME,
        )
        return OAuthFlow(config, timeout=5.0)

    def test_authorization_url_uses_config(self):
        flow = self.make_flow()
        query = parse_qs(urlparse(flow.authorization_url(state="abc")).query)

        assert query["scope"][0] == "https://www.googleapis.com/auth/analytics.readonly"
        assert query["redirect_uri"][0] == "https://seo.example.com/api/ga4/callback"
        assert query["state"][0] == "abc"
        assert "prompt" not in query
        assert flow.cookie_name == "ga4_token"

    @pytest.mark.asyncio
    @respx.mock
    async def test_exchange_sends_configured_redirect_uri(self):
        route = respx.post(TOKEN_URL).respond(200, json={"access_token": "ya29.ga4"})

        tokens = await self.make_flow().exchange("code-1")

        form = parse_qs(route.calls.last.request.content.decode())
        assert form["redirect_uri"][0] == "https://seo.example.com/api/ga4/callback"
        assert isinstance(tokens, OAuthTokens)
        assert tokens.expiry_date is None
