# ABOUTME: In-memory lock implementations package
# ABOUTME: Exports the asyncio based per-identity lock guard

from .lock_guard import InMemoryLockGuard

__all__ = ["InMemoryLockGuard"]
