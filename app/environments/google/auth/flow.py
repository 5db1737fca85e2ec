"""
OAuth Flow - one parameterized authorization-code flow.

Search Console and Analytics run the same three steps (redirect to
consent, exchange the code, store the token set); they only differ in
client credentials, redirect URI, scopes and cookie name. OAuthFlow binds
an OAuthFlowConfig to a GoogleAuthClient and exposes both legs.

Usage:
======
    flow = OAuthFlow(config)
    url = flow.authorization_url()          # leg 1: initiator
    tokens = await flow.exchange(code)      # leg 2: exchanger
"""

import logging
from typing import Optional

import httpx

from app.environments.base import OAuthTokens
from app.environments.google.auth.client import GoogleAuthClient
from app.environments.google.auth.schemas import OAuthFlowConfig


logger = logging.getLogger("seo.environments.google.flow")


class OAuthFlow:
    """Authorization initiator and token exchanger for one flow configuration."""

    def __init__(
        self,
        config: OAuthFlowConfig,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.client = GoogleAuthClient(
            client_id=config.client_id,
            client_secret=config.client_secret,
            redirect_uri=config.redirect_uri,
            timeout=timeout,
            transport=transport,
        )

    @property
    def cookie_name(self) -> str:
        return self.config.cookie_name

    @property
    def redirect_uri(self) -> str:
        return self.config.redirect_uri

    def authorization_url(self, state: Optional[str] = None) -> str:
        """Consent URL requesting offline access for the configured scopes."""
        return self.client.get_authorization_url(
            scopes=self.config.scopes,
            state=state,
            redirect_uri=self.config.redirect_uri,
            access_type="offline",
            prompt=self.config.prompt,
            include_granted_scopes=self.config.include_granted_scopes,
        )

    async def exchange(self, code: str) -> OAuthTokens:
        """
        Exchange the authorization code using the configured redirect URI.

        Raises:
            AuthenticationError: Propagated from the client
        """
        logger.info(f"Exchanging authorization code for the {self.config.provider} flow")
        return await self.client.exchange_code_for_tokens(
            code=code,
            redirect_uri=self.config.redirect_uri,
        )
