"""Base class for async Bungie.net clients."""

import logging
from typing import Optional

import httpx

from ..application.exceptions import ConfigurationError


def validate_api_key(api_key: Optional[str], owner: str):
    """Rejects a missing API key or an unreplaced ``YOUR_...`` placeholder."""
    if not api_key or "YOUR_" in api_key.upper():
        raise ConfigurationError(
            f"API key for {owner} is missing "
            f"or is a placeholder. Please check your config files."
        )


class BaseClient:
    """A base client that holds the shared async client and credentials."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        oauth_client_id: Optional[str] = None,
        oauth_client_secret: Optional[str] = None,
    ):
        """
        Initializes the base client.

        Args:
            client: An instance of httpx.AsyncClient carrying the default
                    headers, cookie jar and connection pool.
            api_key: The application's Bungie.net API key.
            oauth_client_id: OAuth client id, needed only for token calls.
            oauth_client_secret: OAuth client secret, needed for refreshes
                                 and for confidential clients.

        Raises:
            ConfigurationError: If the API key is missing or appears to be
                                a placeholder.
        """

        validate_api_key(api_key, self.__class__.__name__)

        self.client = client
        self.api_key = api_key
        self.oauth_client_id = oauth_client_id
        self.oauth_client_secret = oauth_client_secret
        self.logger = logging.getLogger(self.__class__.__name__)

    async def aclose(self):
        """Release the connection pool."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        await self.aclose()
