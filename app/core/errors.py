"""
Service errors - the HTTP-facing error taxonomy and its JSON rendering.

Routers raise these; the handler registered by register_error_handlers()
turns them into {"error": ..., "details": ...} bodies with the right status.

Taxonomy:
=========
- ConfigurationError    500  required environment values are missing
- ValidationFailed      400  malformed client input
- NotAuthenticated      401  missing, invalid or expired session token
- UpstreamError         500  a Google call failed for a non-auth reason
- NotImplementedFeature 501  feature stub

None of these are retried by the server.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


logger = logging.getLogger("seo.errors")


class ServiceError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        error: str,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        # Cookies to clear on the error response (e.g. stale tokens)
        self.clear_cookies: List[str] = []

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ConfigurationError(ServiceError):
    """Raised when required environment variables are not configured."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, missing: Iterable[str], error: str = "Server configuration error."):
        self.missing = list(missing)
        super().__init__(
            error,
            "The following server environment variables are not configured: "
            f"{', '.join(self.missing)}.",
        )


class ValidationFailed(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotAuthenticated(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotImplementedFeature(ServiceError):
    status_code = status.HTTP_501_NOT_IMPLEMENTED

    def to_dict(self) -> Dict[str, Any]:
        # The draft stub speaks to end users: {message, details}
        return {"message": self.error, "details": self.details}


def register_error_handlers(app: FastAPI) -> None:
    """Install the ServiceError -> JSONResponse handler on the app."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        if exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.error} {exc.details or ''}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.error}")

        response = JSONResponse(exc.to_dict(), status_code=exc.status_code)
        for cookie_name in exc.clear_cookies:
            response.delete_cookie(cookie_name, path="/")
        return response
