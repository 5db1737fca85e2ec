"""
Authenticated request helper shared by the Google API clients.

Maps Google's HTTP failures onto APIError:
- 401 → credentials rejected (token expired or revoked)
- 403 → scope not granted or no access to the resource
- anything else non-2xx → generic API failure
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.environments.base import APIError


logger = logging.getLogger("seo.environments.google.http")


class GoogleAPIRequester:
    """
    Sends bearer-authenticated JSON requests to one Google API.

    Attributes:
        base_url: API root, e.g. "https://searchconsole.googleapis.com/webmasters/v3"
        api_label: Name used in log lines and error messages
    """

    def __init__(
        self,
        access_token: str,
        base_url: str,
        api_label: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.access_token = access_token
        self.base_url = base_url
        self.api_label = api_label
        self.timeout = timeout
        self._transport = transport

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> dict:
        """
        Make an authenticated request.

        Args:
            method: HTTP method (GET, POST)
            endpoint: Path appended to base_url
            params: Query parameters
            json_body: JSON request body

        Returns:
            Parsed JSON response ({} for an empty body)

        Raises:
            APIError: If the request fails
        """
        url = f"{self.base_url}{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    params=params,
                    json=json_body,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in {self.api_label} API: {e}")
                raise APIError(f"Network error: {e}")

        if response.status_code == 401:
            logger.error(f"{self.api_label} API: Unauthorized (token may be expired)")
            raise APIError(
                "Unauthorized - access token may be expired",
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error(f"{self.api_label} API: Forbidden (scope may be missing)")
            raise APIError(
                f"Forbidden - {self.api_label} scope may not be granted",
                status_code=403,
                response=response.text,
            )

        if response.status_code not in (200, 201):
            error_detail = response.text
            logger.error(f"{self.api_label} API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        return response.json() if response.content else {}
