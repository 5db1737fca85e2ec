"""
Auth Complete Router - the page Google redirects the Search Console popup to.

GET /gsc-auth-complete?code=... serves a static page; its script posts the
code to /api/gsc/exchange-token and closes the popup on success.
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.services.auth_completion import render_auth_complete_page


router = APIRouter(tags=["search-console"])


@router.get("/gsc-auth-complete", response_class=HTMLResponse)
async def gsc_auth_complete():
    return HTMLResponse(content=render_auth_complete_page())
