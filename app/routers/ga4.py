"""
Analytics Router - OAuth and report endpoints for Google Analytics 4.

Endpoints:
==========
- GET  /api/ga4/auth        → Redirect to Google's consent screen
- GET  /api/ga4/callback    → Google redirects here, sets the ga4_token cookie
- POST /api/ga4/query       → Page traffic report for a property
- GET  /api/ga4/properties  → Properties the user can access
- POST /api/ga4/logout      → Clear the ga4_token cookie

Unlike Search Console, the code exchange happens server-side in the
callback: the redirect URI is always {APP_BASE_URL}/api/ga4/callback.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from app.core.config import Settings
from app.core.errors import NotAuthenticated, ValidationFailed
from app.deps import get_settings, read_json_object
from app.environments.base import APIError
from app.environments.google.analytics import AnalyticsClient
from app.environments.google.auth import GA4_COOKIE_NAME
from app.schemas.oauth import AnalyticsQueryRequest
from app.services.oauth_flows import (
    authorization_url,
    build_ga4_flow,
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


logger = logging.getLogger("seo.routers.ga4")


router = APIRouter(prefix="/api/ga4", tags=["analytics"])

# Where the browser lands once the cookie is set
POST_LOGIN_REDIRECT = "/dashboard"


# ---------------------------------------------------------------------------
# OAUTH
# ---------------------------------------------------------------------------


@router.get("/auth")
async def ga4_auth(settings: Settings = Depends(get_settings)):
    """
    Start the Analytics OAuth flow.

    Requires GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and APP_BASE_URL;
    otherwise answers 500 naming the missing variables without calling Google.
    """
    flow = build_ga4_flow(settings)
    url = authorization_url(flow)

    logger.info("Redirecting to Google consent screen (GA4)")
    return RedirectResponse(url=url, status_code=302)


@router.get("/callback")
async def ga4_callback(
    code: Optional[str] = Query(None, description="Authorization code from Google"),
    error: Optional[str] = Query(None, description="Error from Google (e.g., access_denied)"),
    settings: Settings = Depends(get_settings),
):
    """
    Handle Google's redirect after the user consents (or refuses).

    Returns:
        302 to /dashboard with Set-Cookie: ga4_token=<json>
    """
    if error:
        logger.warning(f"GA4 authorization refused by Google: {error}")
        raise ValidationFailed("Authorization was not granted.", details=error)

    if not code:
        raise ValidationFailed("Authorization code is missing.")

    flow = build_ga4_flow(settings)
    tokens = await exchange_code(flow, code)

    response = RedirectResponse(url=POST_LOGIN_REDIRECT, status_code=302)
    set_token_cookie(response, flow.cookie_name, tokens, secure=settings.is_production)

    logger.info("Analytics tokens stored in cookie")
    return response


# ---------------------------------------------------------------------------
# REPORTS
# ---------------------------------------------------------------------------


@router.post("/query")
async def ga4_query(
    request: Request,
    response: Response,
    settings: Settings = Depends(get_settings),
    ga4_token: Optional[str] = Cookie(None),
):
    """
    Page traffic for the last 90 days.

    Request body:
        {"propertyId": "123456789"}   (or "properties/123456789")

    Returns:
        [{"pagePath", "sessions", "totalUsers", "engagementRate", "conversions"}, ...]
    """
    if not ga4_token:
        raise NotAuthenticated(NOT_AUTHENTICATED_MESSAGE)

    require_client_credentials(settings)

    body = await read_json_object(request)
    try:
        payload = AnalyticsQueryRequest.model_validate(body)
    except ValidationError:
        raise ValidationFailed("propertyId is required.")

    tokens, refreshed = await restore_session(ga4_token, GA4_COOKIE_NAME, settings)

    client = AnalyticsClient(tokens.access_token, timeout=settings.GOOGLE_HTTP_TIMEOUT)
    try:
        rows = await client.run_page_report(payload.propertyId)
    except APIError as e:
        raise translate_api_error(e, GA4_COOKIE_NAME, "Google Analytics")

    if refreshed:
        set_token_cookie(response, GA4_COOKIE_NAME, tokens, secure=settings.is_production)

    return [row.model_dump() for row in rows]


@router.get("/properties")
async def ga4_properties(
    response: Response,
    settings: Settings = Depends(get_settings),
    ga4_token: Optional[str] = Cookie(None),
):
    """List GA4 properties as {name, displayName}."""
    if not ga4_token:
        raise NotAuthenticated(NOT_AUTHENTICATED_MESSAGE)

    require_client_credentials(settings)

    tokens, refreshed = await restore_session(ga4_token, GA4_COOKIE_NAME, settings)

    client = AnalyticsClient(tokens.access_token, timeout=settings.GOOGLE_HTTP_TIMEOUT)
    try:
        properties = await client.list_properties()
    except APIError as e:
        raise translate_api_error(e, GA4_COOKIE_NAME, "Google Analytics")

    if refreshed:
        set_token_cookie(response, GA4_COOKIE_NAME, tokens, secure=settings.is_production)

    return [prop.model_dump() for prop in properties]


@router.post("/logout")
async def ga4_logout():
    """Forget the Analytics session."""
    response = JSONResponse({"success": True, "message": "Logged out successfully."})
    clear_token_cookie(response, GA4_COOKIE_NAME)
    return response
