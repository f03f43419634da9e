"""Tests for the opt-in retry policy."""

import pytest
from tenacity import wait_none

from bungie_client.application.exceptions import (
    ApiError,
    DeserializationError,
    TransportError,
)
from bungie_client.infrastructure.api_models import PlatformErrorCode
from bungie_client.infrastructure.decorators import (
    is_transient,
    retry_on_transient_error,
)


class TestIsTransient:
    """Test which failures are worth another attempt."""

    def test_transport_errors_are_transient(self):
        assert is_transient(TransportError("connection reset"))

    def test_throttle_codes_are_transient(self):
        assert is_transient(ApiError(PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED))
        assert is_transient(ApiError(51, "PerEndpointRequestThrottleExceeded"))

    def test_other_api_errors_are_not(self):
        assert not is_transient(ApiError(PlatformErrorCode.DESTINY_PRIVACY_RESTRICTION))
        assert not is_transient(ApiError(PlatformErrorCode.ACCESS_TOKEN_HAS_EXPIRED))

    def test_shape_errors_are_not(self):
        assert not is_transient(DeserializationError("bad payload"))
        assert not is_transient(ValueError("boom"))


class TestRetryOnTransientError:
    """Test the decorator with waits disabled."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        calls = []

        @retry_on_transient_error
        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise TransportError("connection reset")
            return "ok"

        assert await flaky.retry_with(wait=wait_none())() == "ok"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_gives_up_and_reraises_last_error(self):
        calls = []

        @retry_on_transient_error
        async def throttled():
            calls.append(1)
            raise ApiError(PlatformErrorCode.THROTTLE_LIMIT_EXCEEDED, "ThrottleLimitExceeded")

        with pytest.raises(ApiError) as exc_info:
            await throttled.retry_with(wait=wait_none())()

        assert exc_info.value.status == "ThrottleLimitExceeded"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_permanent_errors_are_not_retried(self):
        calls = []

        @retry_on_transient_error
        async def private_profile():
            calls.append(1)
            raise ApiError(PlatformErrorCode.DESTINY_PRIVACY_RESTRICTION)

        with pytest.raises(ApiError):
            await private_profile.retry_with(wait=wait_none())()

        assert len(calls) == 1
