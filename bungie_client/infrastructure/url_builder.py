"""URL composition for Bungie.net endpoints."""

import enum
from collections.abc import Sequence as AbcSequence
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import httpx

from ..application.exceptions import UrlConstructionError

BUNGIE_HOST = "www.bungie.net"
PLATFORM_URL = f"https://{BUNGIE_HOST}/Platform"
ROOT_URL = f"https://{BUNGIE_HOST}"

QueryParams = Sequence[Tuple[str, Any]]

# Characters that would end a path segment or the path itself.
_PATH_DELIMITERS = ("/", "?", "#")


def format_value(value: Any) -> str:
    """Render a path or query value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return format_value(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, AbcSequence) and not isinstance(value, (str, bytes)):
        return ",".join(format_value(item) for item in value)
    return str(value)


def _present(query: Optional[Iterable[Tuple[str, Any]]]) -> List[Tuple[str, str]]:
    """Keep only the supplied parameters, in the order they were given."""
    if not query:
        return []
    return [(name, format_value(value)) for name, value in query if value is not None]


def build_url(
    template: str,
    query: Optional[QueryParams] = None,
    base: str = PLATFORM_URL,
    **path: Any,
) -> httpx.URL:
    """
    Compose a request URL from a path template and optional query params.

    Path values are required and are interpolated as-is; the URL parser
    percent-encodes what it can and rejects the rest. Values containing
    ``/``, ``?`` or ``#`` are refused outright since they would silently
    send the request to another route. A query parameter
    whose value is ``None`` is left out entirely, and with no parameters
    left the URL carries no query string at all.

    Args:
        template: Path relative to ``base``, with ``{name}`` placeholders.
        query: Ordered ``(name, value)`` pairs.
        base: Scheme and host prefix, the Platform root by default.
        **path: Values for the placeholders in ``template``.

    Returns:
        The parsed URL.

    Raises:
        UrlConstructionError: If a path value contains a delimiter, or the
                              result is not a valid https URL on the
                              Bungie.net host.
    """

    formatted = {name: format_value(value) for name, value in path.items()}
    for name, value in formatted.items():
        if any(char in value for char in _PATH_DELIMITERS):
            raise UrlConstructionError(
                f"Path value {name}={value!r} would change the route of {template!r}"
            )
    try:
        raw = base + template.format(**formatted)
        url = httpx.URL(raw, params=_present(query))
    except (httpx.InvalidURL, KeyError, IndexError, ValueError) as e:
        raise UrlConstructionError(f"Error parsing URL for {template!r}: {e}") from e

    if url.scheme != "https" or url.host != BUNGIE_HOST:
        raise UrlConstructionError(
            f"Refusing to call {url!s}: only https://{BUNGIE_HOST} is allowed"
        )

    return url
