# ABOUTME: NoOp lock implementations package
# ABOUTME: Exports the lock guard that never blocks

from .lock_guard import NoOpLockGuard

__all__ = ["NoOpLockGuard"]
