"""
Environments Module - External Service Integrations

Architecture Overview:
======================
environments/
├── __init__.py           # Module exports
├── base.py               # Provider contract, exceptions and token set
└── google/               # Google integration
    ├── auth/             # OAuth flow, redirect-URI resolution
    ├── search_console/   # Search Console API
    └── analytics/        # GA4 Data + Admin APIs

Design Principles:
==================
1. Shared Authentication: one OAuth flow, parameterized per product
2. Service Independence: each API client only needs an access token
3. Testability: clients accept an httpx transport for tests
"""

from app.environments.base import (
    EnvironmentProvider,
    EnvironmentError,
    AuthenticationError,
    TokenExpiredError,
    APIError,
    OAuthTokens,
)

__all__ = [
    "EnvironmentProvider",
    "EnvironmentError",
    "AuthenticationError",
    "TokenExpiredError",
    "APIError",
    "OAuthTokens",
]
