# ABOUTME: Package initialization for the rate limiter core
# ABOUTME: Re-exports the limiter, its factory, stores, lock guards and models

"""
Admission control for shared budgets.

This package decides whether a caller may consume units of a named budget,
using a token bucket, fixed window, sliding window or no-limit policy. State
lives behind a store contract and every transition is serialised per identity
by a lock guard contract, so the same limiter works for tasks of one process
or, with shared backends, for many processes.
"""

from ratelimiter.components.limiter import Limiter, RateLimiterFactory
from ratelimiter.exceptions import (
    RateLimiterError,
    InvalidRequestError,
    MaxWaitExceededError,
    StorageUnavailableError,
    LockUnavailableError,
    InvalidConfigurationError,
    ReserveNotSupportedError,
    RateLimitExceededError,
)
from ratelimiter.implementations.memory import InMemoryLockGuard, InMemoryStateStore
from ratelimiter.implementations.noop import NoOpLockGuard, NoOpStateStore
from ratelimiter.interfaces import AbstractLockGuard, AbstractRateLimiter, AbstractStateStore
from ratelimiter.models import LimiterConfig, PolicyType, Rate, RateLimitResult, Reservation

__version__ = "0.1.0"

__all__ = [
    "Limiter",
    "RateLimiterFactory",
    "RateLimiterError",
    "InvalidRequestError",
    "MaxWaitExceededError",
    "StorageUnavailableError",
    "LockUnavailableError",
    "InvalidConfigurationError",
    "ReserveNotSupportedError",
    "RateLimitExceededError",
    "InMemoryLockGuard",
    "InMemoryStateStore",
    "NoOpLockGuard",
    "NoOpStateStore",
    "AbstractLockGuard",
    "AbstractRateLimiter",
    "AbstractStateStore",
    "LimiterConfig",
    "PolicyType",
    "Rate",
    "RateLimitResult",
    "Reservation",
]
