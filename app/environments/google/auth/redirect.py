"""
Redirect-URI resolution for the Google OAuth flows.

The redirect URI sent when starting the flow and the one sent when
exchanging the code must be byte-identical, and both must be registered in
Google Cloud Console. Every route that needs the URI goes through this
module, so the two legs cannot drift apart.

Resolution order (Search Console flow):
=======================================
1. GOOGLE_REDIRECT_URI, then NEXT_PUBLIC_GSC_REDIRECT_URI (used verbatim)
2. VERCEL_URL                      -> https://{VERCEL_URL}{callback_path}
3. Host header of the request      -> http for localhost, https otherwise
4. Nothing available               -> None (configuration error for callers)
"""

from typing import Optional

from app.core.config import Settings


# Page that receives ?code=... and posts it to /api/gsc/exchange-token
GSC_CALLBACK_PATH = "/gsc-auth-complete"

# Server-side callback for the Analytics flow
GA4_CALLBACK_PATH = "/api/ga4/callback"


def _is_localhost(host: str) -> bool:
    hostname = host.split(":", 1)[0].strip().lower()
    return hostname == "localhost"


def resolve_base_url(settings: Settings, host: Optional[str]) -> Optional[str]:
    """
    Derive the public base URL (scheme + host, no trailing slash).

    Args:
        settings: Current settings
        host: Value of the request's Host header, if any

    Returns:
        Base URL, or None if neither VERCEL_URL nor a Host header is available
    """
    vercel_url = settings.VERCEL_URL.strip().rstrip("/")
    if vercel_url:
        return f"https://{vercel_url}"

    host = (host or "").strip()
    if not host:
        return None

    protocol = "http" if _is_localhost(host) else "https"
    return f"{protocol}://{host}"


def resolve_redirect_uri(
    settings: Settings,
    host: Optional[str],
    callback_path: str = GSC_CALLBACK_PATH,
) -> Optional[str]:
    """
    Derive the redirect URI advertised to Google.

    Deterministic: the same settings and Host header always produce the
    same string, whichever leg of the flow asks.

    Returns:
        The redirect URI, or None when no host information exists at all
    """
    for override in (settings.GOOGLE_REDIRECT_URI, settings.NEXT_PUBLIC_GSC_REDIRECT_URI):
        if override and override.strip():
            return override.strip()

    base_url = resolve_base_url(settings, host)
    if base_url is None:
        return None
    return f"{base_url}{callback_path}"


def ga4_redirect_uri(settings: Settings) -> Optional[str]:
    """Analytics callback, always anchored on APP_BASE_URL."""
    base_url = settings.APP_BASE_URL.strip().rstrip("/")
    if not base_url:
        return None
    return f"{base_url}{GA4_CALLBACK_PATH}"
