# ABOUTME: In-memory implementations package
# ABOUTME: Exports process-local state store and lock guard

from .lock import InMemoryLockGuard
from .storage import InMemoryStateStore

__all__ = [
    "InMemoryLockGuard",
    "InMemoryStateStore",
]
