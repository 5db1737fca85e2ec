"""
Google Search Console API Client - search analytics and site list.

API Reference:
==============
- searchAnalytics.query: https://developers.google.com/webmaster-tools/v1/searchanalytics/query
- sites.list: https://developers.google.com/webmaster-tools/v1/sites/list

Usage Example:
==============
    client = SearchConsoleClient(access_token="ya29.xxx")
    rows = await client.query_search_analytics("https://example.com/")
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from app.environments.google.http import GoogleAPIRequester
from app.environments.google.search_console.schemas import SearchAnalyticsQuery, SiteEntry


logger = logging.getLogger("seo.environments.google.search_console")


class SearchConsoleClient:
    """
    Search Console API client.

    Requires an access token with the webmasters.readonly scope.
    """

    BASE_URL = "https://searchconsole.googleapis.com/webmasters/v3"

    def __init__(
        self,
        access_token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._requester = GoogleAPIRequester(
            access_token=access_token,
            base_url=self.BASE_URL,
            api_label="Search Console",
            timeout=timeout,
            transport=transport,
        )

    async def query_search_analytics(
        self,
        site_url: str,
        query: Optional[SearchAnalyticsQuery] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a search analytics query for a property.

        Args:
            site_url: Property URL ("https://example.com/" or "sc-domain:example.com")
            query: Query shape; defaults to the last 90 days by query and page,
                capped at 5000 rows

        Returns:
            The rows exactly as Google returned them ([] when there are none)

        Raises:
            APIError: If the request fails
        """
        query = query or SearchAnalyticsQuery.last_days()

        logger.info(
            "Querying search analytics",
            extra={
                "site_url": site_url,
                "start_date": query.start_date.isoformat(),
                "end_date": query.end_date.isoformat(),
            },
        )

        response_data = await self._requester.request(
            method="POST",
            endpoint=f"/sites/{quote(site_url, safe='')}/searchAnalytics/query",
            json_body=query.to_request_body(),
        )

        rows = response_data.get("rows") or []
        logger.info(f"Fetched {len(rows)} search analytics rows")
        return rows

    async def list_sites(self) -> List[SiteEntry]:
        """List the properties the user can access."""
        response_data = await self._requester.request(method="GET", endpoint="/sites")
        return [SiteEntry(**entry) for entry in response_data.get("siteEntry") or []]
