# ABOUTME: Interfaces package exports
# ABOUTME: Exports the limiter, state store and lock guard contracts

from .common import AbstractRateLimiter
from .lock import AbstractLockGuard
from .storage import AbstractStateStore

__all__ = [
    "AbstractRateLimiter",
    "AbstractLockGuard",
    "AbstractStateStore",
]
