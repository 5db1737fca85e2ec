"""
Base classes and interfaces for Environment integrations.

This module defines the token set stored in the session cookie, the
provider-side exceptions, and the contract every OAuth provider implements
(EnvironmentProvider). API clients only need an access token.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional, List, Dict, Any


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------
# Provider-side failures. Routers translate them into app.core.errors.


class EnvironmentError(Exception):
    """Base exception for all environment-related errors."""
    pass


class AuthenticationError(EnvironmentError):
    """
    Raised when authentication with a provider fails.

    Carries Google's error code (e.g. "redirect_uri_mismatch",
    "invalid_grant") when the token endpoint returned one.
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.error_code = error_code


class TokenExpiredError(EnvironmentError):
    """Raised when an OAuth token has expired and refresh failed."""
    pass


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @property
    def is_auth_failure(self) -> bool:
        """True when the provider rejected the credentials themselves."""
        if self.status_code == 401:
            return True
        return "invalid_grant" in str(self)


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Token set returned by the provider.

    Field names follow the JSON that Google's client libraries persist
    (expiry_date is epoch milliseconds), so a cookie written by either side
    can be read back by the other.
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expiry_date: Optional[int] = None  # Unix epoch, milliseconds
    scope: Optional[str] = None  # Space-separated scopes granted
    id_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthTokens":
        """
        Build a token set from a decoded JSON object.

        The data usually comes from a client-supplied cookie, so every field
        is type-checked rather than coerced.

        Raises:
            ValueError: If access_token is missing, or any field has the wrong type
        """
        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("Token set has no access_token")

        for key in ("token_type", "refresh_token", "scope", "id_token"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Token set field {key} must be a string")

        expiry = data.get("expiry_date")
        if expiry is not None and (isinstance(expiry, bool) or not isinstance(expiry, (int, float))):
            raise ValueError("Token set field expiry_date must be a number")

        return cls(
            access_token=access_token,
            token_type=data.get("token_type") or "Bearer",
            refresh_token=data.get("refresh_token"),
            expiry_date=int(expiry) if expiry is not None else None,
            scope=data.get("scope"),
            id_token=data.get("id_token"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, dropping unset fields."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def is_expired(self, leeway_seconds: int = 60) -> bool:
        """True if the access token expires within leeway_seconds."""
        if self.expiry_date is None:
            return False
        return self.expiry_date <= (time.time() + leeway_seconds) * 1000


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The provider is responsible for:
    - Generating authorization URLs
    - Exchanging authorization codes for tokens
    - Refreshing expired tokens
    """

    @abstractmethod
    def get_authorization_url(
        self,
        scopes: List[str],
        state: Optional[str] = None,
        redirect_uri: Optional[str] = None,
    ) -> str:
        """
        Generate the OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: Optional opaque value echoed back by the provider
            redirect_uri: Override the default redirect URI

        Returns:
            URL to redirect the user to for authorization
        """
        pass

    @abstractmethod
    async def exchange_code_for_tokens(
        self,
        code: str,
        redirect_uri: Optional[str] = None,
    ) -> OAuthTokens:
        """
        Exchange authorization code for access/refresh tokens.

        Args:
            code: Authorization code from the callback
            redirect_uri: Must match the redirect_uri used in authorization

        Raises:
            AuthenticationError: If code exchange fails
        """
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Raises:
            TokenExpiredError: If refresh token is invalid/expired
        """
        pass
