"""
Search Console Router - OAuth and query endpoints for Google Search Console.

Endpoints:
==========
- GET  /api/gsc/auth            → Redirect to Google's consent screen
- POST /api/gsc/exchange-token  → Exchange the code, set the gsc_token cookie
- POST /api/gsc/query           → Search analytics rows for a property
- GET  /api/gsc/sites           → Properties the user can access
- POST /api/gsc/logout          → Clear the gsc_token cookie

OAuth Flow:
===========
1. The app opens GET /api/gsc/auth in a popup
2. Google sends the popup to /gsc-auth-complete?code=...
3. That page posts the code to /api/gsc/exchange-token
4. The token set is stored in the gsc_token cookie
5. Later page loads call /api/gsc/query, which reads the cookie
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from app.core.config import Settings
from app.core.errors import NotAuthenticated, ValidationFailed
from app.deps import get_request_host, get_settings, read_json_object
from app.environments.base import APIError
from app.environments.google.auth import GSC_COOKIE_NAME
from app.environments.google.search_console import SearchConsoleClient
from app.schemas.oauth import ExchangeTokenRequest, SearchConsoleQueryRequest
from app.services.oauth_flows import (
    authorization_url,
    build_gsc_flow,
    exchange_code,
    require_client_credentials,
    translate_api_error,
)
from app.services.token_cookie import (
    NOT_AUTHENTICATED_MESSAGE,
    clear_token_cookie,
    restore_session,
    set_token_cookie,
)


logger = logging.getLogger("seo.routers.gsc")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api/gsc", tags=["search-console"])


# ---------------------------------------------------------------------------
# OAUTH
# ---------------------------------------------------------------------------


@router.get("/auth")
async def gsc_auth(
    settings: Settings = Depends(get_settings),
    host: Optional[str] = Depends(get_request_host),
):
    """
    Start the Search Console OAuth flow.

    Returns:
        302 to Google's consent screen, or 500 {error, details} when the
        client credentials or the redirect URI cannot be determined
    """
    flow = build_gsc_flow(settings, host)
    url = authorization_url(flow)

    logger.info("Redirecting to Google consent screen", extra={"redirect_uri": flow.redirect_uri})
    return RedirectResponse(url=url, status_code=302)


@router.post("/exchange-token")
async def gsc_exchange_token(
    request: Request,
    settings: Settings = Depends(get_settings),
    host: Optional[str] = Depends(get_request_host),
):
    """
    Exchange an authorization code for tokens and store them in a cookie.

    Request body:
        {"code": "<authorization code>"}

    Returns:
        200 {"success": true} with Set-Cookie: gsc_token=<json>
    """
    flow = build_gsc_flow(settings, host)

    body = await read_json_object(request)
    try:
        payload = ExchangeTokenRequest.model_validate(body)
    except ValidationError:
        raise ValidationFailed("Invalid authorization code provided.")

    tokens = await exchange_code(flow, payload.code)

    response = JSONResponse({"success": True})
    set_token_cookie(response, flow.cookie_name, tokens, secure=settings.is_production)

    logger.info("Search Console tokens stored in cookie")
    return response


# ---------------------------------------------------------------------------
# QUERIES
# ---------------------------------------------------------------------------


@router.post("/query")
async def gsc_query(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    gsc_token: Optional[str] = Cookie(None),
):
    """
    Search analytics for the last 90 days, by query and page.

    Request body:
        {"siteUrl": "https://example.com/"}

    Returns:
        The raw rows from Google (possibly [])

    Errors:
        401 if the cookie is missing or Google rejects the token
        400 if siteUrl is missing
        500 on other provider failures
    """
    if not gsc_token:
        raise NotAuthenticated(NOT_AUTHENTICATED_MESSAGE)

    require_client_credentials(settings)

    body = await read_json_object(request)
    try:
        payload = SearchConsoleQueryRequest.model_validate(body)
    except ValidationError:
        raise ValidationFailed("siteUrl is required.")

    tokens, refreshed = await restore_session(gsc_token, GSC_COOKIE_NAME, settings)

    client = SearchConsoleClient(tokens.access_token, timeout=settings.GOOGLE_HTTP_TIMEOUT)
    try:
        rows = await client.query_search_analytics(payload.siteUrl)
    except APIError as e:
        raise translate_api_error(e, GSC_COOKIE_NAME, "Google Search Console")

    if refreshed:
        set_token_cookie(response, GSC_COOKIE_NAME, tokens, secure=settings.is_production)

    return rows


@router.get("/sites")
async def gsc_sites(
    response: Response,
    settings: Settings = Depends(get_settings),
    gsc_token: Optional[str] = Cookie(None),
):
    """List the Search Console properties available to the signed-in user."""
    if not gsc_token:
        raise NotAuthenticated(NOT_AUTHENTICATED_MESSAGE)

    require_client_credentials(settings)

    tokens, refreshed = await restore_session(gsc_token, GSC_COOKIE_NAME, settings)

    client = SearchConsoleClient(tokens.access_token, timeout=settings.GOOGLE_HTTP_TIMEOUT)
    try:
        sites = await client.list_sites()
    except APIError as e:
        raise translate_api_error(e, GSC_COOKIE_NAME, "Google Search Console")

    if refreshed:
        set_token_cookie(response, GSC_COOKIE_NAME, tokens, secure=settings.is_production)

    return [site.model_dump(exclude_none=True) for site in sites]


@router.post("/logout")
async def gsc_logout():
    """Forget the Search Console session."""
    response = JSONResponse({"success": True, "message": "Logged out successfully."})
    clear_token_cookie(response, GSC_COOKIE_NAME)
    return response
