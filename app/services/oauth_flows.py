"""
OAuth flow factory - builds the Search Console and Analytics flows from settings.

Every builder validates configuration first and raises ConfigurationError
naming exactly the missing variables, so no provider call is attempted
with an incomplete setup.
"""

import logging
from typing import Optional

from app.core.config import Settings
from app.core.errors import ConfigurationError, UpstreamError
from app.environments.base import APIError, AuthenticationError, OAuthTokens
from app.environments.google.auth import (
    ANALYTICS_SCOPES,
    GA4_COOKIE_NAME,
    GSC_COOKIE_NAME,
    SEARCH_CONSOLE_SCOPES,
    OAuthFlow,
    OAuthFlowConfig,
    ga4_redirect_uri,
    resolve_redirect_uri,
)
from app.services.token_cookie import invalid_session


logger = logging.getLogger("seo.services.oauth_flows")


CLIENT_CREDENTIALS = ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET")


def require_client_credentials(settings: Settings) -> None:
    """Raise ConfigurationError unless client id and secret are set."""
    missing = settings.missing(*CLIENT_CREDENTIALS)
    if missing:
        raise ConfigurationError(missing)


def build_gsc_flow(settings: Settings, host: Optional[str]) -> OAuthFlow:
    """
    Search Console flow; the redirect URI comes from the shared resolver.

    Raises:
        ConfigurationError: Missing credentials or no way to derive the URI
    """
    missing = settings.missing(*CLIENT_CREDENTIALS)
    redirect_uri = resolve_redirect_uri(settings, host)
    if redirect_uri is None:
        missing.append("GOOGLE_REDIRECT_URI")
    if missing:
        raise ConfigurationError(missing)

    config = OAuthFlowConfig(
        provider="gsc",
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=redirect_uri,
        scopes=SEARCH_CONSOLE_SCOPES,
        cookie_name=GSC_COOKIE_NAME,
        prompt="consent",
    )
    return OAuthFlow(config, timeout=settings.GOOGLE_HTTP_TIMEOUT)


def build_ga4_flow(settings: Settings) -> OAuthFlow:
    """
    Analytics flow; redirect URI is {APP_BASE_URL}/api/ga4/callback.

    Raises:
        ConfigurationError: Missing credentials or APP_BASE_URL
    """
    missing = settings.missing(*CLIENT_CREDENTIALS, "APP_BASE_URL")
    if missing:
        raise ConfigurationError(missing)

    config = OAuthFlowConfig(
        provider="ga4",
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_uri=ga4_redirect_uri(settings),
        scopes=ANALYTICS_SCOPES,
        cookie_name=GA4_COOKIE_NAME,
    )
    return OAuthFlow(config, timeout=settings.GOOGLE_HTTP_TIMEOUT)


def authorization_url(flow: OAuthFlow) -> str:
    """
    Consent URL for the flow; a failure is reported once as a 500.
    """
    try:
        return flow.authorization_url()
    except ValueError as e:
        logger.error(f"Could not build {flow.config.provider} auth URL: {e}")
        raise UpstreamError("Unable to generate the authentication URL.", details=str(e))


async def exchange_code(flow: OAuthFlow, code: str) -> OAuthTokens:
    """
    Exchange the code, surfacing the likely cause when Google refuses it.

    Raises:
        UpstreamError: With details quoting the redirect URI that was sent
    """
    try:
        return await flow.exchange(code)
    except AuthenticationError as e:
        logger.error(f"{flow.config.provider} code exchange failed ({e.error_code}): {e}")
        raise UpstreamError(
            "Failed to exchange authorization code for token.",
            details=(
                f"Google API Error: {e}. This error is often caused by a "
                f"'redirect_uri_mismatch'. Make sure the redirect URI "
                f"({flow.redirect_uri}) is identical to the one configured "
                f"in your Google Cloud Console."
            ),
        )


def translate_api_error(error: APIError, cookie_name: str, product: str) -> Exception:
    """
    Map a provider API failure to the HTTP error for the caller.

    Rejected credentials become a 401 that clears the cookie, so the client
    restarts the authorization flow instead of retrying.
    """
    if error.is_auth_failure:
        return invalid_session(cookie_name)
    return UpstreamError(f"Failed to query data from {product}.", details=str(error))
