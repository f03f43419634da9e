"""Tests for the request/response pipeline of BungieClient."""

import json

import httpx
import pytest

from bungie_client.application.exceptions import (
    ApiError,
    DeserializationError,
    MissingPayloadError,
    TransportError,
    UnexpectedContentTypeError,
)
from bungie_client.infrastructure.api_models import PlatformErrorCode

from conftest import API_KEY, envelope


def raw_json(body, **kwargs) -> httpx.Response:
    """A response with a JSON body but no Content-Type header."""
    return httpx.Response(200, content=json.dumps(body).encode(), **kwargs)


class TestEnvelopeProcessing:
    """Test the classification of received responses."""

    @pytest.mark.asyncio
    async def test_success_returns_payload_unchanged(self, make_client):
        locales = {"en": "en", "fr": "fr", "zh-chs": "zh-chs"}
        async with make_client(httpx.Response(200, json=envelope(locales))) as client:
            result = await client.get_available_locales()

        assert result == locales

    @pytest.mark.asyncio
    async def test_json_content_type_with_charset_is_accepted(self, make_client):
        response = raw_json(
            envelope({"en": "en"}),
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
        async with make_client(response) as client:
            assert await client.get_available_locales() == {"en": "en"}

    @pytest.mark.asyncio
    async def test_missing_content_type_is_tolerated(self, make_client):
        async with make_client(raw_json(envelope({"en": "en"}))) as client:
            assert await client.get_available_locales() == {"en": "en"}

    @pytest.mark.asyncio
    async def test_non_json_content_type_is_rejected_even_with_json_body(
        self, make_client
    ):
        response = raw_json(envelope({"en": "en"}), headers={"Content-Type": "text/html"})
        async with make_client(response) as client:
            with pytest.raises(UnexpectedContentTypeError) as exc_info:
                await client.get_available_locales()

        assert exc_info.value.content_type == "text/html"

    @pytest.mark.asyncio
    async def test_error_code_raises_api_error_with_code_and_message(self, make_client):
        body = envelope(
            {"en": "en"},
            error_code=PlatformErrorCode.DESTINY_PRIVACY_RESTRICTION,
            error_status="DestinyPrivacyRestriction",
            message="This user has chosen to keep their data private.",
        )
        async with make_client(httpx.Response(200, json=body)) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.get_available_locales()

        error = exc_info.value
        assert error.code == 1665
        assert error.status == "DestinyPrivacyRestriction"
        assert error.message == "This user has chosen to keep their data private."

    @pytest.mark.asyncio
    async def test_error_code_on_http_error_status_is_still_api_error(self, make_client):
        body = envelope(
            None,
            error_code=PlatformErrorCode.SYSTEM_DISABLED,
            error_status="SystemDisabled",
            message="This system is temporarily disabled for maintenance.",
            ThrottleSeconds=30,
        )
        async with make_client(httpx.Response(503, json=body)) as client:
            with pytest.raises(ApiError) as exc_info:
                await client.get_common_settings()

        assert exc_info.value.code == PlatformErrorCode.SYSTEM_DISABLED
        assert exc_info.value.throttle_seconds == 30

    @pytest.mark.asyncio
    async def test_null_response_under_success_is_missing_payload(self, make_client):
        async with make_client(httpx.Response(200, json=envelope(None))) as client:
            with pytest.raises(MissingPayloadError):
                await client.get_available_locales()

    @pytest.mark.asyncio
    async def test_absent_response_under_success_is_missing_payload(self, make_client):
        body = {"ErrorCode": 1, "ErrorStatus": "Success", "Message": "Ok"}
        async with make_client(httpx.Response(200, json=body)) as client:
            with pytest.raises(MissingPayloadError):
                await client.get_available_locales()

    @pytest.mark.asyncio
    async def test_malformed_json_is_deserialization_error(self, make_client):
        response = httpx.Response(
            200,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        async with make_client(response) as client:
            with pytest.raises(DeserializationError):
                await client.get_available_locales()

    @pytest.mark.asyncio
    async def test_envelope_without_error_code_is_deserialization_error(
        self, make_client
    ):
        response = httpx.Response(200, json={"Response": {"en": "en"}})
        async with make_client(response) as client:
            with pytest.raises(DeserializationError):
                await client.get_available_locales()

    @pytest.mark.asyncio
    async def test_payload_of_wrong_shape_is_deserialization_error(self, make_client):
        response = httpx.Response(200, json=envelope(["en", "fr"]))
        async with make_client(response) as client:
            with pytest.raises(DeserializationError):
                await client.get_available_locales()


class TestDispatch:
    """Test what goes over the wire and how transport failures surface."""

    @pytest.mark.asyncio
    async def test_transport_failure_is_transport_error(self, make_client):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(refuse) as client:
            with pytest.raises(TransportError) as exc_info:
                await client.get_available_locales()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_api_key_sent_and_no_authorization_without_token(
        self, make_client, sent_requests
    ):
        async with make_client(httpx.Response(200, json=envelope({}))) as client:
            await client.get_available_locales()

        request = sent_requests[0]
        assert request.headers["X-API-Key"] == API_KEY
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_bearer_token_attached_when_given(self, make_client, sent_requests):
        async with make_client(httpx.Response(200, json=envelope({}))) as client:
            await client.get_available_locales(access_token="abc123")

        assert sent_requests[0].headers["Authorization"] == "Bearer abc123"

    @pytest.mark.asyncio
    async def test_compression_is_negotiated(self, make_client, sent_requests):
        async with make_client(httpx.Response(200, json=envelope({}))) as client:
            await client.get_available_locales()

        accepted = sent_requests[0].headers["Accept-Encoding"]
        assert "gzip" in accepted
        assert "deflate" in accepted

    @pytest.mark.asyncio
    async def test_redirects_are_not_followed(self, make_client, sent_requests):
        redirect = httpx.Response(
            302,
            headers={
                "Location": "https://www.bungie.net/maintenance/",
                "Content-Type": "text/html",
            },
            content=b"<html>Moved</html>",
        )
        async with make_client(redirect) as client:
            with pytest.raises(UnexpectedContentTypeError):
                await client.get_common_settings()

        assert len(sent_requests) == 1

    @pytest.mark.asyncio
    async def test_cookies_are_kept_between_calls(self, make_client, sent_requests):
        first = httpx.Response(
            200,
            json=envelope({"en": "en"}),
            headers={"Set-Cookie": "bungled=abc123; Path=/"},
        )
        second = httpx.Response(200, json=envelope({"en": "en"}))
        async with make_client(first, second) as client:
            await client.get_available_locales()
            await client.get_available_locales()

        assert "Cookie" not in sent_requests[0].headers
        assert "bungled=abc123" in sent_requests[1].headers["Cookie"]

    @pytest.mark.asyncio
    async def test_exactly_one_attempt_per_call(self, make_client, sent_requests):
        body = envelope(None, error_code=PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED)
        async with make_client(httpx.Response(200, json=body)) as client:
            with pytest.raises(ApiError):
                await client.get_available_locales()

        assert len(sent_requests) == 1
