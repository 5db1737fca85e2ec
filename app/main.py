"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn app.main:app --reload
"""

from fastapi import FastAPI  # The FastAPI framework
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing

from app.core.config import get_settings  # Application settings
from app.core.errors import register_error_handlers  # {error, details} JSON errors
from app.core.logging_config import setup_logging  # "seo" logger hierarchy
from app.routers import gsc, ga4  # Search Console and Analytics endpoints
from app.routers import auth_complete  # Popup completion page
from app.routers import debug  # Redirect-URI diagnostics
from app.routers import draft  # Draft stub (501)

# Settings read once here only for the app title and log level;
# request handlers get a fresh instance through get_settings()
settings = get_settings()

setup_logging(settings.LOG_LEVEL)

# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
# - docs_url: Swagger UI at http://localhost:8000/docs
# - redoc_url: ReDoc at http://localhost:8000/redoc
app = FastAPI(
    title=settings.APP_NAME,  # "SEO Insights Gateway"
    docs_url="/docs",
    redoc_url="/redoc",
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The dashboard sends the token cookies with every call, so credentials
# must be allowed.
#
# PRODUCTION TODO: Restrict to the dashboard origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
register_error_handlers(app)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# gsc.router: /api/gsc/auth, /exchange-token, /query, /sites, /logout
# ga4.router: /api/ga4/auth, /callback, /query, /properties, /logout
# auth_complete.router: /gsc-auth-complete (popup page)
# debug.router: /api/gsc/auth-debug
# draft.router: /api/draft
app.include_router(gsc.router)
app.include_router(ga4.router)
app.include_router(auth_complete.router)
app.include_router(debug.router)
app.include_router(draft.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Used by load balancers and container health probes. Does NOT contact
    Google or validate configuration.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
