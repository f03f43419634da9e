"""
Error taxonomy for the Bungie.net client.

Every failure a call can end in is one of the classes below, so callers can
catch ``BungieClientError`` for everything or pick the specific branch of the
request/response pipeline they care about.
"""

from typing import Optional


class BungieClientError(Exception):
    """Base exception for all client errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(BungieClientError):
    """Raised when required configuration (API key, OAuth credentials) is missing."""
    pass


# --- Request Errors ---

class UrlConstructionError(BungieClientError):
    """Raised when caller-supplied values do not produce a valid request URL."""
    pass


class TransportError(BungieClientError):
    """Raised when the request could not be sent or no response arrived."""
    pass


# --- Response Errors ---

class UnexpectedContentTypeError(BungieClientError):
    """Raised when the response declares a content type other than JSON."""

    def __init__(self, content_type: str):
        super().__init__(
            f"'Content-Type' of response was not 'application/json': {content_type}"
        )
        self.content_type = content_type


class DeserializationError(BungieClientError):
    """Raised when the body does not match the envelope or payload shape."""
    pass


class ApiError(BungieClientError):
    """
    Raised when the envelope carries a non-success ``ErrorCode``.

    The remote API answers HTTP 200 for most domain failures, so the
    envelope code and message are the real status and are kept verbatim.
    """

    def __init__(
        self,
        code: int,
        status: str = "",
        message: str = "",
        throttle_seconds: int = 0,
    ):
        super().__init__(
            f"The Bungie API returned error code {code} ({status}): {message}"
        )
        self.code = code
        self.status = status
        self.message = message
        self.throttle_seconds = throttle_seconds


class MissingPayloadError(BungieClientError):
    """Raised when a success envelope has no ``Response``."""
    pass


class TokenExchangeError(BungieClientError):
    """Raised when the OAuth token endpoint does not return an access token."""

    def __init__(
        self, error: Optional[str] = None, description: Optional[str] = None
    ):
        detail = error or "no access token in response"
        if description:
            detail = f"{detail}: {description}"
        super().__init__(f"OAuth token exchange failed ({detail})")
        self.error = error
        self.description = description
