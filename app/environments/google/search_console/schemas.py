"""
Search Console Schemas - request and response shapes for the Search Console API.

Reference: https://developers.google.com/webmaster-tools/v1/searchanalytics/query
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# Fixed query shape used by the proxy
DEFAULT_LOOKBACK_DAYS = 90
DEFAULT_DIMENSIONS = ["query", "page"]
DEFAULT_ROW_LIMIT = 5000


class SearchAnalyticsQuery(BaseModel):
    """
    Body of a searchAnalytics.query request.

    Dates are YYYY-MM-DD in the property's timezone; Google interprets
    them, we only format them.
    """
    start_date: date
    end_date: date
    dimensions: List[str] = Field(default_factory=lambda: list(DEFAULT_DIMENSIONS))
    row_limit: int = Field(DEFAULT_ROW_LIMIT, ge=1, le=25000)
    start_row: int = Field(0, ge=0)

    @classmethod
    def last_days(
        cls,
        days: int = DEFAULT_LOOKBACK_DAYS,
        today: Optional[date] = None,
    ) -> "SearchAnalyticsQuery":
        """Query covering the last `days` days, ending today."""
        end = today or date.today()
        return cls(start_date=end - timedelta(days=days), end_date=end)

    def to_request_body(self) -> Dict[str, Any]:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "dimensions": self.dimensions,
            "rowLimit": self.row_limit,
            "startRow": self.start_row,
        }


class SiteEntry(BaseModel):
    """A property the user can access in Search Console."""
    siteUrl: str
    permissionLevel: Optional[str] = None
