"""
This module defines the core request models of the client.

They are plain, transport-agnostic descriptions of a single call; the
infrastructure layer turns them into HTTP exchanges.
"""

import dataclasses
import enum
from typing import Any, Optional

import httpx


class RequestShape(enum.Enum):
    """The three kinds of request the Bungie.net API is called with."""

    GET = "GET"
    POST = "POST"
    POST_WITH_BODY = "POST_WITH_BODY"

    @property
    def method(self) -> str:
        """The HTTP verb used on the wire."""
        return "GET" if self is RequestShape.GET else "POST"


@dataclasses.dataclass(frozen=True)
class ApiRequest:
    """A fully composed call: where, how, as whom and with what body."""

    url: httpx.URL
    shape: RequestShape = RequestShape.GET
    access_token: Optional[str] = None
    body: Any = None

    def headers(self) -> dict:
        """Per-request headers; the API key is a client-wide default."""
        if self.access_token is not None:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}
