# ABOUTME: Exception classes for the rate limiter core
# ABOUTME: Provides structured error handling with context and error codes

from typing import Dict, Any


class RateLimiterError(Exception):
    """Base exception class for the rate limiter.

    Provides structured error handling with optional error codes and contextual
    details. Every fault raised by the limiter, its stores and its lock guards
    inherits from this class so callers can implement a single fail-closed branch.

    Rejections are not faults: a rejected ``consume`` is reported through
    ``RateLimitResult.accepted`` and never raises.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    default_code: str | None = None

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize RateLimiterError with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code; falls back to the class default code
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class InvalidRequestError(RateLimiterError):
    """Exception raised for requests that can never be satisfied.

    Used when:
    - The requested unit count is not a positive integer
    - The requested unit count exceeds the policy's absolute capacity

    Raised before any lock is taken; no state is changed.
    """

    default_code = "INVALID_REQUEST"


class MaxWaitExceededError(RateLimiterError):
    """Exception raised when a reservation would wait longer than allowed.

    Only raised by ``reserve``. The projected wait is available in
    ``details["wait_duration"]`` and the caller's bound in ``details["max_wait"]``.
    No state is changed.
    """

    default_code = "MAX_WAIT_EXCEEDED"

    @property
    def wait_duration(self) -> float | None:
        return self.details.get("wait_duration")


class StorageUnavailableError(RateLimiterError):
    """Exception raised when the state store fails to load or save.

    Used when:
    - The store is closed or unreachable
    - The store rejects the identity or the state
    - The store's capacity limits are exceeded
    """

    default_code = "STORAGE_UNAVAILABLE"


class LockUnavailableError(RateLimiterError):
    """Exception raised when the per-identity lock cannot be acquired or released.

    Used when:
    - Lock acquisition times out
    - The lock service is unavailable
    - A lock token is released twice or was never issued
    """

    default_code = "LOCK_UNAVAILABLE"


class InvalidConfigurationError(RateLimiterError):
    """Exception raised when limiter options fail validation.

    Should include details about the offending option, or the list of
    validation errors under ``details["errors"]``.
    """

    default_code = "INVALID_CONFIGURATION"


class ReserveNotSupportedError(RateLimiterError):
    """Exception raised when a policy cannot hand out reservations."""

    default_code = "RESERVE_NOT_SUPPORTED"


class RateLimitExceededError(RateLimiterError):
    """Exception raised by ``RateLimitResult.ensure_accepted`` for rejected results.

    Carries the rejected result so callers can read ``retry_after``.
    """

    default_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str, result: Any = None, code: str | None = None, details: Dict[str, Any] | None = None):
        super().__init__(message, code, details)
        self.result = result
