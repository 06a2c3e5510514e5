# ABOUTME: Unit tests for the rate limiter exception hierarchy
# ABOUTME: Tests default codes, details handling and the single fail-closed base class
import pytest

from ratelimiter.exceptions import (
    InvalidConfigurationError,
    InvalidRequestError,
    LockUnavailableError,
    MaxWaitExceededError,
    RateLimitExceededError,
    RateLimiterError,
    ReserveNotSupportedError,
    StorageUnavailableError,
)


class TestRateLimiterError:
    """Test cases for the RateLimiterError base class."""

    @pytest.mark.unit
    def test_message_only(self):
        exception = RateLimiterError("Test error message")

        assert exception.message == "Test error message"
        assert exception.code is None
        assert exception.details == {}
        assert str(exception) == "Test error message"

    @pytest.mark.unit
    def test_all_parameters(self):
        details = {"identity": "login-bob", "attempt": 2}

        exception = RateLimiterError("Test error message", "TEST_ERROR", details)

        assert exception.code == "TEST_ERROR"
        assert exception.details == details

    @pytest.mark.unit
    def test_details_are_copied(self):
        """Mutating the caller's dict must not change the raised error."""
        details = {"identity": "login-bob"}
        exception = RateLimiterError("error", details=details)

        details["identity"] = "changed"

        assert exception.details == {"identity": "login-bob"}

    @pytest.mark.unit
    def test_is_an_exception(self):
        with pytest.raises(RateLimiterError):
            raise RateLimiterError("boom")


class TestErrorTaxonomy:
    """Test the concrete error classes."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error_class, code",
        [
            (InvalidRequestError, "INVALID_REQUEST"),
            (MaxWaitExceededError, "MAX_WAIT_EXCEEDED"),
            (StorageUnavailableError, "STORAGE_UNAVAILABLE"),
            (LockUnavailableError, "LOCK_UNAVAILABLE"),
            (InvalidConfigurationError, "INVALID_CONFIGURATION"),
            (ReserveNotSupportedError, "RESERVE_NOT_SUPPORTED"),
            (RateLimitExceededError, "RATE_LIMIT_EXCEEDED"),
        ],
    )
    def test_default_codes_and_base_class(self, error_class, code):
        exception = error_class("message")

        assert exception.code == code
        assert isinstance(exception, RateLimiterError)

    @pytest.mark.unit
    def test_explicit_code_overrides_default(self):
        exception = StorageUnavailableError("store closed", code="STORE_CLOSED")

        assert exception.code == "STORE_CLOSED"

    @pytest.mark.unit
    def test_max_wait_exceeded_exposes_wait_duration(self):
        exception = MaxWaitExceededError("too long", details={"wait_duration": 12.5, "max_wait": 5.0})

        assert exception.wait_duration == 12.5
        assert MaxWaitExceededError("too long").wait_duration is None

    @pytest.mark.unit
    def test_rate_limit_exceeded_carries_result(self):
        result = object()

        exception = RateLimitExceededError("limited", result=result, details={"retry_after": 3.0})

        assert exception.result is result
        assert exception.details["retry_after"] == 3.0
        assert exception.code == "RATE_LIMIT_EXCEEDED"
