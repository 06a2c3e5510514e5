# ABOUTME: NoOp implementations package
# ABOUTME: Exports state store and lock guard variants that do nothing

from .lock import NoOpLockGuard
from .storage import NoOpStateStore

__all__ = [
    "NoOpLockGuard",
    "NoOpStateStore",
]
