# ABOUTME: Limiter models package exports
# ABOUTME: Exports configuration and decision value objects

from .config import LimiterConfig, Rate
from .result import RateLimitResult, Reservation

__all__ = [
    "LimiterConfig",
    "Rate",
    "RateLimitResult",
    "Reservation",
]
