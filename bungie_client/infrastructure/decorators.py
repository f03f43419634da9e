"""
Opt-in retry policy for callers of the Bungie.net client.

The client itself makes exactly one attempt per call; applications that want
to ride out network blips or throttling wrap their own coroutines with the
decorator below.
"""

import logging

from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ..application.exceptions import ApiError, TransportError
from .api_models import THROTTLE_ERROR_CODES

logger = logging.getLogger(__name__)

# --- Constants for Retry Logic ---
_RETRY_ATTEMPTS = 3
_RETRY_MIN_WAIT_SECONDS = 1
_RETRY_MAX_WAIT_SECONDS = 10


def is_transient(exception: BaseException) -> bool:
    """True for failures a later attempt can plausibly succeed on."""
    if isinstance(exception, TransportError):
        return True
    return isinstance(exception, ApiError) and exception.code in THROTTLE_ERROR_CODES


def _log_before_retry(retry_state):
    """Log the retry attempt with details about the exception and wait time."""
    exception = retry_state.outcome.exception()
    next_attempt_in = retry_state.next_action.sleep
    logger.warning(
        f"Retrying {retry_state.fn.__name__} in {next_attempt_in:.2f}s due to "
        f"{type(exception).__name__} (attempt {retry_state.attempt_number})..."
    )


# A pre-configured decorator for coroutines that call the client
retry_on_transient_error = retry(
    stop=stop_after_attempt(_RETRY_ATTEMPTS),
    wait=wait_exponential(
        multiplier=1,
        min=_RETRY_MIN_WAIT_SECONDS,
        max=_RETRY_MAX_WAIT_SECONDS,
    ),
    retry=retry_if_exception(is_transient),
    before_sleep=_log_before_retry,
    reraise=True,
)
