"""
Google OAuth Schemas - Data structures for Google authentication.

This module defines the scopes, the per-product flow configuration and the
token endpoint response used in the Google OAuth flow.
"""

import time
from typing import Optional, List
from pydantic import BaseModel, Field

from app.environments.base import OAuthTokens


# ---------------------------------------------------------------------------
# OAUTH SCOPE CONSTANTS
# ---------------------------------------------------------------------------
# Reference: https://developers.google.com/identity/protocols/oauth2/scopes

# Search Console - read-only access to search analytics and site list
SEARCH_CONSOLE_SCOPES = [
    "https://www.googleapis.com/auth/webmasters.readonly",
]

# Analytics - read-only access to GA4 reports and account summaries
ANALYTICS_SCOPES = [
    "https://www.googleapis.com/auth/analytics.readonly",
]


# ---------------------------------------------------------------------------
# COOKIE NAMES
# ---------------------------------------------------------------------------
GSC_COOKIE_NAME = "gsc_token"
GA4_COOKIE_NAME = "ga4_token"


# ---------------------------------------------------------------------------
# FLOW CONFIGURATION
# ---------------------------------------------------------------------------

class OAuthFlowConfig(BaseModel):
    """
    Everything that distinguishes one OAuth flow from another.

    The Search Console and Analytics flows share all control flow; only
    this configuration differs.
    """
    provider: str = Field(..., description="Flow identifier used in logs (gsc, ga4)")
    client_id: str = Field(..., description="Google OAuth Client ID")
    client_secret: str = Field(..., description="Google OAuth Client Secret")
    redirect_uri: str = Field(..., description="OAuth callback URL, byte-identical on both legs")
    scopes: List[str] = Field(..., description="Scopes requested at consent")
    cookie_name: str = Field(..., description="Cookie holding the token set")
    prompt: Optional[str] = Field(None, description="'consent' forces the consent screen")
    include_granted_scopes: bool = Field(True, description="Incremental authorization")


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class GoogleTokenResponse(BaseModel):
    """
    Response from Google's token endpoint.

    Example response from Google:
    {
        "access_token": "ya29.a0AfB_byC...",
        "expires_in": 3599,
        "refresh_token": "1//0eXyz...",
        "scope": "https://www.googleapis.com/auth/webmasters.readonly",
        "token_type": "Bearer"
    }
    """
    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="Bearer", description="Token type (usually Bearer)")
    expires_in: Optional[int] = Field(None, description="Seconds until expiration")
    refresh_token: Optional[str] = Field(None, description="Refresh token for renewal")
    scope: Optional[str] = Field(None, description="Space-separated scopes granted")
    id_token: Optional[str] = Field(None, description="JWT with user info (OpenID)")

    def get_expiry_date(self) -> Optional[int]:
        """Expiry as epoch milliseconds, computed from expires_in."""
        if self.expires_in is None:
            return None
        return int((time.time() + self.expires_in) * 1000)

    def to_tokens(self, fallback_refresh_token: Optional[str] = None) -> OAuthTokens:
        """
        Convert to the stored token set.

        Google usually omits refresh_token on refresh responses, so the
        caller can pass the one it already has.
        """
        return OAuthTokens(
            access_token=self.access_token,
            token_type=self.token_type,
            refresh_token=self.refresh_token or fallback_refresh_token,
            expiry_date=self.get_expiry_date(),
            scope=self.scope,
            id_token=self.id_token,
        )
