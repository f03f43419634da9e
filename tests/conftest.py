"""Shared fixtures: a client wired to an in-memory httpx transport."""

import httpx
import pytest

from bungie_client.infrastructure.client_builder import BungieClientBuilder

API_KEY = "test-api-key"


def envelope(response=None, error_code=1, error_status="Success", message="Ok", **extra):
    """A Bungie.net response envelope as the API would send it."""
    body = {
        "Response": response,
        "ErrorCode": error_code,
        "ThrottleSeconds": 0,
        "ErrorStatus": error_status,
        "Message": message,
        "MessageData": {},
    }
    body.update(extra)
    return body


@pytest.fixture
def sent_requests():
    """Every request the mock transport received, in order."""
    return []


@pytest.fixture
def make_client(sent_requests):
    """
    Builds a client whose transport answers with the given responses.

    Each response is either an httpx.Response or a callable taking the
    request and returning one (or raising a transport error).
    """

    def _make(*responses, builder=None):
        queue = list(responses)

        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            response = queue.pop(0)
            return response(request) if callable(response) else response

        builder = builder or BungieClientBuilder().with_api_key(API_KEY)
        return builder.with_transport(httpx.MockTransport(handler)).build()

    return _make
