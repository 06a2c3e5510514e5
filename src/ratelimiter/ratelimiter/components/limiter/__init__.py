# ABOUTME: Limiter components package exports
# ABOUTME: Exports the limiter orchestrator and the per-key factory

from .limiter import Limiter
from .factory import RateLimiterFactory

__all__ = [
    "Limiter",
    "RateLimiterFactory",
]
