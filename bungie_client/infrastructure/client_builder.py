"""Builder for configured BungieClient instances."""

from importlib import metadata
from typing import Optional, Union

import httpx

from ..application.exceptions import ConfigurationError

from .api_client import BungieClient
from .base_client import validate_api_key

try:
    LIBRARY_VERSION = metadata.version("bungie-client")
except metadata.PackageNotFoundError:
    LIBRARY_VERSION = "0.0.0"

API_KEY_HEADER = "X-API-Key"


class BungieClientBuilder:
    """
    Collects credentials and produces an immutable BungieClient.

    Only the API key is required. The resulting client shares one
    connection pool and cookie jar across all of its calls, negotiates
    compression, never follows redirects and sets no timeout.
    """

    def __init__(self):
        self._api_key: Optional[str] = None
        self._user_agent: Optional[str] = None
        self._oauth_client_id: Optional[str] = None
        self._oauth_client_secret: Optional[str] = None
        self._transport: Optional[httpx.AsyncBaseTransport] = None

    def with_api_key(self, api_key: str) -> "BungieClientBuilder":
        self._api_key = api_key
        return self

    def with_user_agent(self, user_agent: str) -> "BungieClientBuilder":
        """Sets the User-Agent; the library name and version are appended."""
        self._user_agent = f"{user_agent} bungie-client/{LIBRARY_VERSION}"
        return self

    def with_oauth_client_id(self, client_id: Union[int, str]) -> "BungieClientBuilder":
        self._oauth_client_id = str(client_id)
        return self

    def with_oauth_client_secret(self, client_secret: str) -> "BungieClientBuilder":
        self._oauth_client_secret = client_secret
        return self

    def with_transport(
        self, transport: httpx.AsyncBaseTransport
    ) -> "BungieClientBuilder":
        """Routes requests through a custom httpx transport."""
        self._transport = transport
        return self

    def build(self) -> BungieClient:
        """
        Creates the client.

        Raises:
            ConfigurationError: If no usable API key was given.
        """

        if not self._api_key:
            raise ConfigurationError("An API key is required.")
        # Must run before the AsyncClient is created.
        validate_api_key(self._api_key, BungieClient.__name__)

        headers = {API_KEY_HEADER: self._api_key}
        if self._user_agent is not None:
            headers["User-Agent"] = self._user_agent

        client = httpx.AsyncClient(
            headers=headers,
            follow_redirects=False,
            timeout=None,
            transport=self._transport,
        )

        return BungieClient(
            client,
            self._api_key,
            oauth_client_id=self._oauth_client_id,
            oauth_client_secret=self._oauth_client_secret,
        )
