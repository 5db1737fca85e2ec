"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    An empty string means "not configured". Route handlers never trust a
    module-level instance: they receive a fresh Settings per request through
    get_settings(), so the environment at request time is what counts.
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "SEO Insights Gateway"

    # LOG_LEVEL: Root level for the "seo" logger hierarchy
    LOG_LEVEL: str = "INFO"

    # NODE_ENV: Deployment environment name ("development", "production", ...)
    # - Kept under this name so the same variables work on the hosting platform
    # - Cookies get the Secure flag only when this is "production"
    NODE_ENV: str = ""

    # ---------------------------------------------------------------------------
    # GOOGLE OAUTH SETTINGS
    # ---------------------------------------------------------------------------
    # Google Cloud Console: https://console.cloud.google.com/apis/credentials
    #
    # Setup Instructions:
    # 1. Enable the Search Console API, Analytics Data API and Analytics Admin API
    # 2. Configure OAuth consent screen (External, add test users)
    # 3. Create OAuth 2.0 Client ID (Web application)
    # 4. Add the redirect URIs shown by GET /api/gsc/auth-debug and
    #    {APP_BASE_URL}/api/ga4/callback
    # 5. Copy Client ID and Client Secret to .env file

    # GOOGLE_CLIENT_ID: OAuth 2.0 Client ID from Google Cloud Console
    GOOGLE_CLIENT_ID: str = ""

    # GOOGLE_CLIENT_SECRET: OAuth 2.0 Client Secret from Google Cloud Console
    GOOGLE_CLIENT_SECRET: str = ""

    # GOOGLE_REDIRECT_URI: Explicit redirect URI for the Search Console flow
    # - Must match exactly what's configured in Google Cloud Console
    # - When empty, the URI is derived from VERCEL_URL or the Host header
    GOOGLE_REDIRECT_URI: str = ""

    # NEXT_PUBLIC_GSC_REDIRECT_URI: Legacy name for the same override
    NEXT_PUBLIC_GSC_REDIRECT_URI: str = ""

    # APP_BASE_URL: Public base URL, used for the GA4 callback
    # - For local dev: http://localhost:8000
    APP_BASE_URL: str = ""

    # VERCEL_URL: Deployment host injected by the hosting platform (no scheme)
    VERCEL_URL: str = ""

    # GOOGLE_HTTP_TIMEOUT: Seconds before an outbound Google call is abandoned
    GOOGLE_HTTP_TIMEOUT: float = 30.0

    # ---------------------------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------------------------

    @property
    def is_production(self) -> bool:
        """True when cookies must carry the Secure attribute."""
        return self.NODE_ENV == "production"

    def missing(self, *names: str) -> List[str]:
        """
        Return the setting names (in the order given) that are not configured.

        Example:
            settings.missing("GOOGLE_CLIENT_ID", "APP_BASE_URL")
            # -> ["APP_BASE_URL"] when only the client id is set
        """
        return [name for name in names if not str(getattr(self, name, "") or "").strip()]


def get_settings() -> Settings:
    """
    FastAPI dependency returning the current settings.

    Tests replace it through app.dependency_overrides.
    """
    return Settings()
