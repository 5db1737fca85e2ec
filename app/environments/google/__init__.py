"""
Google Environment Module - Google integration

This module provides integration with:
- Search Console (search analytics, site list)
- Analytics 4 (page report, property list)

Architecture:
=============
google/
├── __init__.py           # Module exports
├── http.py               # Bearer-authenticated request helper
├── auth/                 # Shared OAuth authentication
│   ├── client.py         # Google OAuth implementation
│   ├── flow.py           # Parameterized initiator + exchanger
│   ├── redirect.py       # Redirect-URI resolution
│   └── schemas.py        # Scopes, flow config, token response
├── search_console/       # Search Console API
└── analytics/            # GA4 Data + Admin APIs

Usage:
======
    from app.environments.google import OAuthFlow, SearchConsoleClient

    flow = OAuthFlow(config)
    tokens = await flow.exchange(code)

    gsc = SearchConsoleClient(access_token=tokens.access_token)
    rows = await gsc.query_search_analytics("https://example.com/")
"""

from app.environments.google.auth import GoogleAuthClient, OAuthFlow, OAuthFlowConfig
from app.environments.google.search_console import SearchConsoleClient
from app.environments.google.analytics import AnalyticsClient

__all__ = [
    "GoogleAuthClient",
    "OAuthFlow",
    "OAuthFlowConfig",
    "SearchConsoleClient",
    "AnalyticsClient",
]
