"""
Google Auth Module - OAuth 2.0 Authentication for Google Services

OAuth 2.0 Flow Overview:
========================
1. User clicks "Connect Search Console" (or Analytics) in the app
2. Backend builds the authorization URL with the product's scopes
3. User is redirected to Google's consent screen
4. Google redirects back with an authorization code
5. Backend exchanges the code for access + refresh tokens
6. Tokens are stored in an HTTP-only cookie for later API calls

Both products share this module; OAuthFlowConfig holds what differs.
"""

from app.environments.google.auth.client import GoogleAuthClient
from app.environments.google.auth.flow import OAuthFlow
from app.environments.google.auth.redirect import (
    GA4_CALLBACK_PATH,
    GSC_CALLBACK_PATH,
    ga4_redirect_uri,
    resolve_base_url,
    resolve_redirect_uri,
)
from app.environments.google.auth.schemas import (
    ANALYTICS_SCOPES,
    GA4_COOKIE_NAME,
    GSC_COOKIE_NAME,
    GoogleTokenResponse,
    OAuthFlowConfig,
    SEARCH_CONSOLE_SCOPES,
)

__all__ = [
    "GoogleAuthClient",
    "OAuthFlow",
    "OAuthFlowConfig",
    "GoogleTokenResponse",
    "ANALYTICS_SCOPES",
    "SEARCH_CONSOLE_SCOPES",
    "GA4_COOKIE_NAME",
    "GSC_COOKIE_NAME",
    "GA4_CALLBACK_PATH",
    "GSC_CALLBACK_PATH",
    "ga4_redirect_uri",
    "resolve_base_url",
    "resolve_redirect_uri",
]
