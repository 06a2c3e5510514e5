# ABOUTME: Lock interfaces package exports
# ABOUTME: Exports the abstract per-identity lock guard

from .lock_guard import AbstractLockGuard

__all__ = [
    "AbstractLockGuard",
]
