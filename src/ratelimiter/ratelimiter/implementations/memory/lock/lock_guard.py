# ABOUTME: In-memory implementation of AbstractLockGuard based on asyncio locks
# ABOUTME: Serialises state transitions per identity for tasks of one event loop

import asyncio
import time
from typing import Dict

from loguru import logger

from ratelimiter.exceptions import LockUnavailableError
from ratelimiter.interfaces.lock.lock_guard import AbstractLockGuard
from ratelimiter.models.lock.token import LockToken
from ratelimiter.models.types import Clock


class InMemoryLockGuard(AbstractLockGuard):
    """
    In-memory implementation of AbstractLockGuard.

    Keeps one `asyncio.Lock` per identity, created on demand and dropped once
    nobody holds or waits for it. Locks are only shared by tasks running on
    the same event loop; limiters spread over several processes need a guard
    backed by a shared lock service.
    """

    def __init__(self, clock: Clock = time.time):
        """
        Initialize the in-memory lock guard.

        Args:
            clock: Time source recorded in issued tokens
        """
        self._clock = clock
        self._locks: Dict[str, asyncio.Lock] = {}
        # holders and waiters per identity
        self._users: Dict[str, int] = {}
        # token_id -> identity
        self._held: Dict[str, str] = {}
        self._logger = logger.bind(name=__name__)

    async def acquire(self, identity: str, timeout: float | None = None) -> LockToken:
        """
        Acquire the lock of an identity.

        Args:
            identity: The limiter identity to lock.
            timeout: Maximum seconds to wait, or None to wait indefinitely.

        Returns:
            The token to release the lock with.

        Raises:
            LockUnavailableError: If the lock is not acquired within the timeout.
        """
        lock = self._locks.get(identity)
        if lock is None:
            lock = self._locks[identity] = asyncio.Lock()
        self._users[identity] = self._users.get(identity, 0) + 1

        try:
            if timeout is None or not lock.locked():
                await lock.acquire()
            else:
                await asyncio.wait_for(lock.acquire(), timeout)
        except asyncio.TimeoutError as e:
            self._forget(identity)
            self._logger.warning(f'Timed out after {timeout}s waiting for the lock of "{identity}"')
            raise LockUnavailableError(
                f'Could not acquire the lock of "{identity}" within {timeout}s',
                details={"identity": identity, "timeout": timeout},
            ) from e
        except BaseException:
            self._forget(identity)
            raise

        token = LockToken(identity=identity, acquired_at=self._clock())
        self._held[token.token_id] = identity
        return token

    async def release(self, token: LockToken) -> None:
        """
        Release a lock acquired through this guard.

        Raises:
            LockUnavailableError: If the token is unknown or already released.
        """
        identity = self._held.pop(token.token_id, None)
        if identity is None:
            raise LockUnavailableError(
                f'Lock token for "{token.identity}" is not held',
                code="LOCK_NOT_HELD",
                details={"identity": token.identity, "token_id": token.token_id},
            )

        self._locks[identity].release()
        self._forget(identity)

    def is_locked(self, identity: str) -> bool:
        lock = self._locks.get(identity)
        return lock is not None and lock.locked()

    def _forget(self, identity: str) -> None:
        remaining = self._users.get(identity, 0) - 1
        if remaining > 0:
            self._users[identity] = remaining
            return
        self._users.pop(identity, None)
        self._locks.pop(identity, None)
