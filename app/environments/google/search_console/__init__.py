"""
Google Search Console Module - search analytics for a verified property.
"""

from app.environments.google.search_console.client import SearchConsoleClient
from app.environments.google.search_console.schemas import SearchAnalyticsQuery, SiteEntry

__all__ = [
    "SearchConsoleClient",
    "SearchAnalyticsQuery",
    "SiteEntry",
]
