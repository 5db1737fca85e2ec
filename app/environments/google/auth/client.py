"""
Google OAuth Client - Handles OAuth 2.0 flow with Google APIs.

This client implements the Google OAuth 2.0 authorization code flow used
by both the Search Console and the Analytics integrations.

OAuth 2.0 Flow Implementation:
==============================
1. get_authorization_url() → User redirected to Google
2. exchange_code_for_tokens() → Called with the code, gets tokens
3. refresh_access_token() → Renew expired access tokens

References:
===========
- OAuth 2.0: https://developers.google.com/identity/protocols/oauth2/web-server
- Token endpoint: https://oauth2.googleapis.com/token
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

import httpx

from app.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    AuthenticationError,
    TokenExpiredError,
)
from app.environments.google.auth.schemas import GoogleTokenResponse


logger = logging.getLogger("seo.environments.google.auth")


def _describe_token_error(response: httpx.Response) -> tuple:
    """Extract (error_code, message) from a failed token endpoint response."""
    try:
        error_data = response.json() if response.content else {}
    except ValueError:
        error_data = {}
    if not isinstance(error_data, dict):
        error_data = {}

    error_code = error_data.get("error")
    message = error_data.get("error_description") or error_code or response.text
    return error_code, message or f"HTTP {response.status_code}"


class GoogleAuthClient(EnvironmentProvider):
    """
    Google OAuth 2.0 Client implementation.

    Tokens obtained here can be used with any Google service that was
    included in the scopes.

    Example Usage:
        client = GoogleAuthClient(
            client_id="...",
            client_secret="...",
            redirect_uri="https://example.com/gsc-auth-complete",
        )

        # Step 1: Generate auth URL
        auth_url = client.get_authorization_url(scopes=SEARCH_CONSOLE_SCOPES)

        # Step 2: Exchange the code Google sent back
        tokens = await client.exchange_code_for_tokens(code="4/0Ab...")
    """

    # Google OAuth endpoints
    AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Google OAuth client.

        Args:
            client_id: Google OAuth Client ID
            client_secret: Google OAuth Client Secret
            redirect_uri: OAuth callback URL (not needed for refresh only)
            timeout: Seconds before a token request is abandoned
            transport: Optional httpx transport (tests)
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self._transport = transport

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        access_type: str = "offline",
        prompt: Optional[str] = None,
        include_granted_scopes: bool = True,
    ) -> str:
        """
        Generate the Google OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: Optional value Google echoes back on the callback
            redirect_uri: Override default callback URL
            access_type: "offline" for refresh token, "online" for access only
            prompt: "consent" forces consent screen (gets refresh token)
            include_granted_scopes: Keep previously granted scopes

        Returns:
            Full authorization URL to redirect the user to

        Raises:
            ValueError: If no redirect URI is known
        """
        target_uri = redirect_uri or self.redirect_uri
        if not target_uri:
            raise ValueError("A redirect URI is required to build the authorization URL")

        params = {
            "client_id": self.client_id,
            "redirect_uri": target_uri,
            "response_type": "code",  # Authorization code flow
            "scope": " ".join(scopes),  # Space-separated scopes
            "access_type": access_type,  # "offline" = include refresh_token
        }
        if include_granted_scopes:
            params["include_granted_scopes"] = "true"
        if prompt:
            params["prompt"] = prompt
        if state:
            params["state"] = state

        auth_url = f"{self.AUTHORIZATION_URL}?{urlencode(params)}"

        logger.info(
            f"Generated Google auth URL with {len(scopes)} scopes",
            extra={"scopes": scopes, "redirect_uri": target_uri},
        )

        return auth_url

    # -------------------------------------------------------------------------
    # TOKEN EXCHANGE
    # -------------------------------------------------------------------------

    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access and refresh tokens.

        Args:
            code: Authorization code from Google
            redirect_uri: Must match the redirect_uri used in authorization

        Returns:
            OAuthTokens with access_token, refresh_token, expiry, etc.

        Raises:
            AuthenticationError: If token exchange fails. error_code carries
                Google's code, e.g. "redirect_uri_mismatch" or "invalid_grant"
        """
        token_data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": redirect_uri or self.redirect_uri or "",
        }

        logger.info("Exchanging authorization code for tokens")

        async with self._http_client() as client:
            try:
                response = await client.post(self.TOKEN_URL, data=token_data)
            except httpx.RequestError as e:
                logger.error(f"Network error during token exchange: {e}")
                raise AuthenticationError(f"Network error: {e}")

        if response.status_code != 200:
            error_code, error_msg = _describe_token_error(response)
            logger.error(f"Token exchange failed: {error_msg}")
            raise AuthenticationError(error_msg, error_code=error_code)

        try:
            token_response = GoogleTokenResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unreadable token exchange response: {e}")
            raise AuthenticationError("Google returned an unreadable token response")

        logger.info(
            "Successfully obtained Google tokens",
            extra={
                "has_refresh_token": token_response.refresh_token is not None,
                "expires_in": token_response.expires_in,
            },
        )

        return token_response.to_tokens()

    # -------------------------------------------------------------------------
    # TOKEN REFRESH
    # -------------------------------------------------------------------------

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Args:
            refresh_token: The refresh token from initial authorization

        Returns:
            OAuthTokens with new access_token (refresh_token kept if not returned)

        Raises:
            TokenExpiredError: If refresh token is invalid or revoked
        """
        refresh_data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        logger.info("Refreshing access token")

        async with self._http_client() as client:
            try:
                response = await client.post(self.TOKEN_URL, data=refresh_data)
            except httpx.RequestError as e:
                logger.error(f"Network error during token refresh: {e}")
                raise TokenExpiredError(f"Network error: {e}")

        if response.status_code != 200:
            _, error_msg = _describe_token_error(response)
            logger.error(f"Token refresh failed: {error_msg}")
            raise TokenExpiredError(f"Token refresh failed: {error_msg}")

        try:
            token_response = GoogleTokenResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Unreadable token refresh response: {e}")
            raise TokenExpiredError("Token refresh failed: unreadable response")

        logger.info(
            "Successfully refreshed access token",
            extra={"expires_in": token_response.expires_in},
        )

        return token_response.to_tokens(fallback_refresh_token=refresh_token)
