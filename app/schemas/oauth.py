"""
Request bodies for the OAuth and query endpoints.

Fields are strict: {"code": 123} is rejected rather than coerced to "123".
Handlers validate these explicitly and answer 400 (not FastAPI's 422).
"""

from pydantic import BaseModel, Field


class ExchangeTokenRequest(BaseModel):
    """Body of POST /api/gsc/exchange-token."""
    code: str = Field(..., min_length=1, strict=True, description="Authorization code from Google")


class SearchConsoleQueryRequest(BaseModel):
    """Body of POST /api/gsc/query."""
    siteUrl: str = Field(..., min_length=1, strict=True, description="Search Console property URL")


class AnalyticsQueryRequest(BaseModel):
    """Body of POST /api/ga4/query."""
    propertyId: str = Field(..., min_length=1, strict=True, description="GA4 property (id or properties/id)")
