"""
Google Analytics (GA4) Client - page traffic reports and property listing.

API Reference:
==============
- Data API runReport: https://developers.google.com/analytics/devguides/reporting/data/v1/rest/v1beta/properties/runReport
- Admin API accountSummaries: https://developers.google.com/analytics/devguides/config/admin/v1/rest/v1beta/accountSummaries/list
"""

import logging
from typing import List, Optional

import httpx

from app.environments.google.http import GoogleAPIRequester
from app.environments.google.analytics.schemas import (
    Ga4DataRow,
    Ga4Property,
    normalize_property_name,
    page_report_body,
)


logger = logging.getLogger("seo.environments.google.analytics")


class AnalyticsClient:
    """
    GA4 Data + Admin API client.

    Requires an access token with the analytics.readonly scope.
    """

    DATA_URL = "https://analyticsdata.googleapis.com/v1beta"
    ADMIN_URL = "https://analyticsadmin.googleapis.com/v1beta"

    def __init__(
        self,
        access_token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._data = GoogleAPIRequester(
            access_token, self.DATA_URL, "Analytics Data", timeout=timeout, transport=transport
        )
        self._admin = GoogleAPIRequester(
            access_token, self.ADMIN_URL, "Analytics Admin", timeout=timeout, transport=transport
        )

    async def run_page_report(self, property_id: str) -> List[Ga4DataRow]:
        """
        Per-page traffic for the last 90 days.

        Rows without a path and the site root ("/") are dropped.

        Raises:
            APIError: If the request fails
        """
        property_name = normalize_property_name(property_id)
        logger.info("Running GA4 page report", extra={"property": property_name})

        response_data = await self._data.request(
            method="POST",
            endpoint=f"/{property_name}:runReport",
            json_body=page_report_body(),
        )

        rows = [Ga4DataRow.from_report_row(row) for row in response_data.get("rows") or []]
        rows = [row for row in rows if row.pagePath and row.pagePath != "/"]

        logger.info(f"Fetched {len(rows)} GA4 page rows")
        return rows

    async def list_properties(self) -> List[Ga4Property]:
        """Flatten account summaries into "Account - Property" entries."""
        response_data = await self._admin.request(
            method="GET",
            endpoint="/accountSummaries",
            params={"pageSize": 200},
        )

        properties = []
        for account in response_data.get("accountSummaries") or []:
            account_name = account.get("displayName") or ""
            for prop in account.get("propertySummaries") or []:
                properties.append(
                    Ga4Property(
                        name=prop.get("property") or "",
                        displayName=f"{account_name} - {prop.get('displayName') or ''}",
                    )
                )
        return properties
