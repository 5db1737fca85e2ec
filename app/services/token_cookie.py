"""
Token Cookie Store - the token set lives in an HTTP-only cookie.

There is no server-side session store: the browser holds the JSON token
set, and every authenticated request brings it back. This module owns the
cookie format and attributes, and turns a raw cookie back into a usable
(and, when possible, refreshed) token set.

Cookie attributes:
==================
- HttpOnly            not readable from page scripts
- Secure              only when NODE_ENV=production
- Max-Age 2592000     30 days, independent of the access token lifetime
- Path /              sent to every API route
- SameSite lax        sent on top-level navigations back from Google
"""

import json
import logging
from typing import Tuple

from fastapi import Response

from app.core.config import Settings
from app.core.errors import NotAuthenticated
from app.environments.base import OAuthTokens, TokenExpiredError
from app.environments.google.auth.client import GoogleAuthClient


logger = logging.getLogger("seo.services.token_cookie")


TOKEN_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days

INVALID_TOKEN_MESSAGE = "Authentication token is invalid or expired."
NOT_AUTHENTICATED_MESSAGE = "Not authenticated."


def serialize_tokens(tokens: OAuthTokens) -> str:
    """Compact JSON form stored in the cookie."""
    return json.dumps(tokens.to_dict(), separators=(",", ":"))


def parse_tokens(raw: str) -> OAuthTokens:
    """
    Decode a cookie value into a token set.

    Raises:
        ValueError: If the value is not a JSON token set
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Token cookie is not a JSON object")
    return OAuthTokens.from_dict(data)


def set_token_cookie(
    response: Response,
    cookie_name: str,
    tokens: OAuthTokens,
    secure: bool,
) -> None:
    """Write the token set onto the response."""
    response.set_cookie(
        key=cookie_name,
        value=serialize_tokens(tokens),
        max_age=TOKEN_COOKIE_MAX_AGE,
        path="/",
        secure=secure,
        httponly=True,
        samesite="lax",
    )


def clear_token_cookie(response: Response, cookie_name: str) -> None:
    response.delete_cookie(cookie_name, path="/")


def invalid_session(cookie_name: str) -> NotAuthenticated:
    """401 that also clears the stale cookie."""
    error = NotAuthenticated(INVALID_TOKEN_MESSAGE)
    error.clear_cookies.append(cookie_name)
    return error


async def restore_session(
    raw_cookie: str,
    cookie_name: str,
    settings: Settings,
) -> Tuple[OAuthTokens, bool]:
    """
    Rebuild the token set from the cookie, refreshing it if it has expired.

    Args:
        raw_cookie: Cookie value as received
        cookie_name: Cookie to clear if the session is unusable
        settings: Provides client credentials and the HTTP timeout

    Returns:
        (tokens, refreshed) - refreshed is True when the caller must write
        the new token set back to the cookie

    Raises:
        NotAuthenticated: If the cookie is unreadable or the refresh failed
    """
    try:
        tokens = parse_tokens(raw_cookie)
    except ValueError as e:
        logger.warning(f"Unreadable {cookie_name} cookie: {e}")
        raise invalid_session(cookie_name)

    if not tokens.is_expired() or not tokens.refresh_token:
        return tokens, False

    auth_client = GoogleAuthClient(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        timeout=settings.GOOGLE_HTTP_TIMEOUT,
    )
    try:
        refreshed = await auth_client.refresh_access_token(tokens.refresh_token)
    except TokenExpiredError as e:
        logger.warning(f"Refresh failed for {cookie_name}: {e}")
        raise invalid_session(cookie_name)

    logger.info(f"Refreshed access token stored in {cookie_name}")
    return refreshed, True
