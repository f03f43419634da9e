"""HTTP implementation of the Bungie.net request/response pipeline."""

import functools
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from ..application.domain import ApiRequest, RequestShape
from ..application.exceptions import (
    ApiError,
    ConfigurationError,
    DeserializationError,
    MissingPayloadError,
    TokenExchangeError,
    TransportError,
    UnexpectedContentTypeError,
)

from .api_models import BungieApiResponse, BungieTokenResponse
from .base_client import BaseClient
from .endpoints import BungieEndpoints
from .url_builder import ROOT_URL, build_url

T = TypeVar("T")

_JSON_CONTENT_TYPE = "application/json"
_TOKEN_ENDPOINT = "/App/OAuth/Token/"
_AUTHORIZE_ENDPOINT = "/{language_code}/OAuth/Authorize/"


@functools.lru_cache(maxsize=None)
def _payload_adapter(payload_type: Any) -> TypeAdapter:
    """One validator per payload type, built on first use."""
    return TypeAdapter(payload_type)


class BungieClient(BungieEndpoints, BaseClient):
    """
    Async client for the Bungie.net Platform API.

    Every endpoint goes through the same pipeline: send one request,
    reject non-JSON responses, unwrap the envelope and validate the payload
    against the endpoint's type. Nothing is retried here; see
    ``decorators.retry_on_transient_error`` for an opt-in policy.

    Build instances with ``BungieClient.builder()``.
    """

    @classmethod
    def builder(cls):
        """Returns a fresh BungieClientBuilder."""
        from .client_builder import BungieClientBuilder

        return BungieClientBuilder()

    # --- Dispatch ---

    async def _get(
        self, url: httpx.URL, payload_type: Type[T], access_token: Optional[str] = None
    ) -> T:
        request = ApiRequest(url, RequestShape.GET, access_token)
        return await self._send(request, payload_type)

    async def _post(
        self, url: httpx.URL, payload_type: Type[T], access_token: Optional[str] = None
    ) -> T:
        request = ApiRequest(url, RequestShape.POST, access_token)
        return await self._send(request, payload_type)

    async def _post_with_body(
        self,
        url: httpx.URL,
        body: Any,
        payload_type: Type[T],
        access_token: Optional[str] = None,
    ) -> T:
        request = ApiRequest(url, RequestShape.POST_WITH_BODY, access_token, body)
        return await self._send(request, payload_type)

    async def _send(self, request: ApiRequest, payload_type: Type[T]) -> T:
        """Executes a composed request and unwraps its envelope."""
        kwargs: Dict[str, Any] = {"headers": request.headers()}
        if request.shape is RequestShape.POST_WITH_BODY:
            kwargs["json"] = to_jsonable_python(request.body, by_alias=True)

        http_response = await self._execute(request.shape.method, request.url, **kwargs)
        return self._process_api_response(http_response, payload_type)

    async def _execute(self, method: str, url: httpx.URL, **kwargs) -> httpx.Response:
        """Executes the raw HTTP request, exactly once."""
        self.logger.debug(f"{method} {url}")
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise TransportError(
                f"There was an error connecting to the Bungie API: {e!r}"
            ) from e
        self.logger.debug(f"{method} {url} -> HTTP {response.status_code}")
        return response

    # --- Response processing ---

    def _check_content_type(self, response: httpx.Response):
        """A missing Content-Type is tolerated; a non-JSON one is not."""
        content_type = response.headers.get("Content-Type")
        if content_type is not None and not content_type.startswith(_JSON_CONTENT_TYPE):
            raise UnexpectedContentTypeError(content_type)

    def _process_api_response(self, response: httpx.Response, payload_type: Type[T]) -> T:
        """
        Turns a raw response into the endpoint's payload.

        Args:
            response: The received HTTP response, whatever its status code.
            payload_type: The type the envelope's ``Response`` must match.

        Returns:
            The validated payload.

        Raises:
            UnexpectedContentTypeError: If the response is not JSON.
            DeserializationError: If the envelope or payload has the wrong shape.
            ApiError: If the envelope's ErrorCode is not Success.
            MissingPayloadError: If a success envelope carries no Response.
        """

        self._check_content_type(response)

        try:
            envelope = BungieApiResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DeserializationError(
                f"There was an error deserializing the JSON response: {e}"
            ) from e

        if not envelope.is_success:
            self.logger.debug(
                f"Envelope error {envelope.error_code} ({envelope.error_status})"
            )
            raise ApiError(
                envelope.error_code,
                envelope.error_status or "",
                envelope.message or "",
                envelope.throttle_seconds,
            )

        if envelope.response is None:
            raise MissingPayloadError("The Bungie API did not include a response")

        try:
            return _payload_adapter(payload_type).validate_python(envelope.response)
        except ValidationError as e:
            raise DeserializationError(
                f"Response payload did not match {payload_type!r}: {e}"
            ) from e

    # --- OAuth ---

    def _require_oauth_client_id(self) -> str:
        if self.oauth_client_id is None:
            raise ConfigurationError("OAuth client ID is required")
        return self.oauth_client_id

    def oauth_get_authorization_url(
        self, language_code: str, state: Optional[str] = None
    ) -> str:
        """
        Builds the URL the user is sent to in order to authorize the app.

        Raises:
            ConfigurationError: If no OAuth client id was configured.
            UrlConstructionError: If the language code breaks the URL.
        """
        query = [
            ("client_id", self._require_oauth_client_id()),
            ("state", state),
            ("response_type", "code"),
        ]
        url = build_url(
            _AUTHORIZE_ENDPOINT, query, base=ROOT_URL, language_code=language_code
        )
        return str(url)

    async def oauth_get_auth_token(self, auth_code: str) -> BungieTokenResponse:
        """Exchanges an authorization code for access and refresh tokens."""
        form = {"client_id": self._require_oauth_client_id()}
        if self.oauth_client_secret is not None:
            form["client_secret"] = self.oauth_client_secret
        form["grant_type"] = "authorization_code"
        form["code"] = auth_code
        return await self._exchange_token(form)

    async def oauth_refresh_auth_token(self, refresh_token: str) -> BungieTokenResponse:
        """Exchanges a refresh token for a new token pair."""
        form = {"client_id": self._require_oauth_client_id()}
        if self.oauth_client_secret is None:
            raise ConfigurationError("OAuth client secret is required")
        form["client_secret"] = self.oauth_client_secret
        form["grant_type"] = "refresh_token"
        form["refresh_token"] = refresh_token
        return await self._exchange_token(form)

    async def _exchange_token(self, form: Dict[str, str]) -> BungieTokenResponse:
        """Posts a token form; the answer is not enveloped."""
        url = build_url(_TOKEN_ENDPOINT)
        response = await self._execute("POST", url, data=form)
        self._check_content_type(response)

        try:
            token = BungieTokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DeserializationError(
                f"There was an error deserializing the token response: {e}"
            ) from e

        if token.access_token is None:
            raise TokenExchangeError(token.error, token.error_description)

        self.logger.info("OAuth token exchange succeeded.")
        return token
