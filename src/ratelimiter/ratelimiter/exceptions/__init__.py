# ABOUTME: Exceptions package exports
# ABOUTME: Exports the rate limiter fault taxonomy

from ratelimiter.exceptions.base import (
    RateLimiterError,
    InvalidRequestError,
    MaxWaitExceededError,
    StorageUnavailableError,
    LockUnavailableError,
    InvalidConfigurationError,
    ReserveNotSupportedError,
    RateLimitExceededError,
)

__all__ = [
    "RateLimiterError",
    "InvalidRequestError",
    "MaxWaitExceededError",
    "StorageUnavailableError",
    "LockUnavailableError",
    "InvalidConfigurationError",
    "ReserveNotSupportedError",
    "RateLimitExceededError",
]
