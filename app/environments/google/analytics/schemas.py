"""
Google Analytics (GA4) Schemas - report rows and property summaries.
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


DEFAULT_LOOKBACK_DAYS = 90

PAGE_REPORT_DIMENSIONS = ["pagePath"]
PAGE_REPORT_METRICS = ["sessions", "totalUsers", "engagementRate", "conversions"]


def normalize_property_name(property_id: str) -> str:
    """Accept "123456" or "properties/123456"; return the resource name."""
    property_id = property_id.strip()
    if property_id.startswith("properties/"):
        return property_id
    return f"properties/{property_id}"


def page_report_body(days: int = DEFAULT_LOOKBACK_DAYS, today: Optional[date] = None) -> Dict[str, Any]:
    """runReport body for per-page traffic over the last `days` days."""
    end = today or date.today()
    start = end - timedelta(days=days)
    return {
        "dateRanges": [{"startDate": start.isoformat(), "endDate": end.isoformat()}],
        "dimensions": [{"name": name} for name in PAGE_REPORT_DIMENSIONS],
        "metrics": [{"name": name} for name in PAGE_REPORT_METRICS],
        "keepEmptyRows": False,
    }


def _value(values: List[Dict[str, Any]], index: int) -> str:
    if index < len(values):
        return values[index].get("value") or "0"
    return "0"


class Ga4DataRow(BaseModel):
    """Traffic for one page path."""
    pagePath: str
    sessions: int = 0
    totalUsers: int = 0
    engagementRate: float = 0.0
    conversions: int = 0

    @classmethod
    def from_report_row(cls, row: Dict[str, Any]) -> "Ga4DataRow":
        """
        Build from a runReport row.

        Example row:
        {"dimensionValues": [{"value": "/blog"}],
         "metricValues": [{"value": "42"}, {"value": "30"},
                          {"value": "0.61"}, {"value": "3"}]}
        """
        dimensions = row.get("dimensionValues") or []
        metrics = row.get("metricValues") or []
        return cls(
            pagePath=(dimensions[0].get("value") or "") if dimensions else "",
            sessions=int(float(_value(metrics, 0))),
            totalUsers=int(float(_value(metrics, 1))),
            engagementRate=float(_value(metrics, 2)),
            conversions=int(float(_value(metrics, 3))),
        )


class Ga4Property(BaseModel):
    """A GA4 property the user can read, labelled with its account."""
    name: str
    displayName: str
