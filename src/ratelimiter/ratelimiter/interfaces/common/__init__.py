# ABOUTME: Common interfaces for callers of the limiter
# ABOUTME: Includes the rate limiter contract

from .rate_limiter import AbstractRateLimiter

__all__ = [
    "AbstractRateLimiter",
]
