# ABOUTME: NoOp implementation of AbstractLockGuard that never blocks
# ABOUTME: Valid only when a single task of a single process uses each identity

import time

from ratelimiter.interfaces.lock.lock_guard import AbstractLockGuard
from ratelimiter.models.lock.token import LockToken
from ratelimiter.models.types import Clock


class NoOpLockGuard(AbstractLockGuard):
    """
    No-operation implementation of AbstractLockGuard.

    Hands out tokens immediately and performs no mutual exclusion. Using it is
    a precondition, not a guarantee: the caller asserts that no two callers
    ever race on the same identity (single-threaded, single-process use).
    Limiters built without a guard use this one, so their code path stays the
    same as with a real guard.

    Use Cases:
    - Command-line tools and scripts with one caller
    - Unit tests of policies through the limiter
    """

    def __init__(self, clock: Clock = time.time):
        self._clock = clock

    async def acquire(self, identity: str, timeout: float | None = None) -> LockToken:
        """Return a token immediately; the timeout is ignored."""
        return LockToken(identity=identity, acquired_at=self._clock())

    async def release(self, token: LockToken) -> None:
        """Nothing to release."""
        pass
