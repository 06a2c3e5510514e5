# ABOUTME: Models package initialization
# ABOUTME: Exports all rate limiter value objects

from .limiter import LimiterConfig, Rate, RateLimitResult, Reservation
from .lock import LockToken
from .policy import (
    PolicyType,
    TokenBucketState,
    FixedWindowState,
    SlidingWindowState,
    PolicyState,
    parse_policy_state,
)
from .types import Clock, DurationInput

__all__ = [
    "LimiterConfig",
    "Rate",
    "RateLimitResult",
    "Reservation",
    "LockToken",
    "PolicyType",
    "TokenBucketState",
    "FixedWindowState",
    "SlidingWindowState",
    "PolicyState",
    "parse_policy_state",
    "Clock",
    "DurationInput",
]
