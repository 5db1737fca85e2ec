"""
Dependencies module - reusable FastAPI dependencies and request helpers.
"""

import json
from typing import Any, Dict, Optional

from fastapi import Request

from app.core.config import Settings, get_settings  # noqa: F401  (re-exported)
from app.core.errors import ValidationFailed


def get_request_host(request: Request) -> Optional[str]:
    """
    Host header of the incoming request.

    Used only as the last-resort source for the redirect URI.
    """
    return request.headers.get("host")


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    Called inside handlers rather than as a dependency, so that checks
    which must win over a malformed body (missing session cookie) run first.

    Raises:
        ValidationFailed: If the body is not valid JSON or not an object
    """
    raw = await request.body()
    try:
        data = json.loads(raw) if raw else None
    except ValueError:
        raise ValidationFailed("Request body must be valid JSON.")

    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object.")
    return data
