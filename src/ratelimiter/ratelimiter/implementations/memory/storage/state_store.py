# ABOUTME: In-memory implementation of AbstractStateStore
# ABOUTME: Provides per-identity state storage with TTL support and background cleanup

import asyncio
import threading
import time
from typing import Dict, Optional, Tuple

from loguru import logger

from ratelimiter.config.settings import get_settings
from ratelimiter.exceptions import StorageUnavailableError
from ratelimiter.interfaces.storage.state_store import AbstractStateStore
from ratelimiter.models.policy.state import PolicyState
from ratelimiter.models.types import Clock


class InMemoryStateStore(AbstractStateStore):
    """
    In-memory implementation of AbstractStateStore.

    States live in a process-local dictionary, so limits are only shared by
    limiters of the same process. Each entry may carry an expiry; expired
    entries are dropped on read and by a periodic cleanup task.

    Features:
    - TTL support with lazy and periodic expiration
    - Thread-safe operations
    - Bounded number of identities
    - Injectable clock, shared with the limiters using the store
    """

    def __init__(
        self,
        cleanup_interval: Optional[float] = None,
        max_keys: Optional[int] = None,
        clock: Clock = time.time,
    ):
        """
        Initialize the in-memory state store.

        Args:
            cleanup_interval: Interval in seconds for automatic cleanup of expired entries;
                defaults to the STORE_CLEANUP_INTERVAL setting
            max_keys: Maximum number of identities to store; defaults to the
                STORE_MAX_KEYS setting
            clock: Time source used to evaluate expirations
        """
        settings = get_settings()
        self.cleanup_interval = cleanup_interval if cleanup_interval is not None else settings.STORE_CLEANUP_INTERVAL
        self.max_keys = max_keys if max_keys is not None else settings.STORE_MAX_KEYS
        self._clock = clock

        # identity -> (state, expires_at or None)
        self._data: Dict[str, Tuple[PolicyState, Optional[float]]] = {}
        self._lock = threading.RLock()
        self._closed = False
        self._cleanup_task: Optional[asyncio.Task] = None
        self._logger = logger.bind(name=__name__)

    def _start_cleanup_task(self) -> None:
        """Start the automatic cleanup task on first use inside an event loop."""
        if self._closed:
            return

        try:
            if self._cleanup_task is None or self._cleanup_task.done():
                self._cleanup_task = asyncio.get_running_loop().create_task(self._cleanup_loop())
        except RuntimeError:
            # No running loop; expired entries are still dropped on read
            pass

    async def _cleanup_loop(self) -> None:
        while not self._closed:
            try:
                await asyncio.sleep(self.cleanup_interval)
            except asyncio.CancelledError:
                break
            removed = self.purge_expired()
            if removed:
                self._logger.debug(f"Purged {removed} expired limiter state(s)")

    def _check_usable(self, identity: str) -> None:
        if self._closed:
            raise StorageUnavailableError("State store is closed", code="STORE_CLOSED")

        if not isinstance(identity, str) or not identity:
            raise StorageUnavailableError(
                "Identity must be a non-empty string", code="INVALID_IDENTITY", details={"identity": identity}
            )

    def _is_expired(self, expires_at: Optional[float], now: float) -> bool:
        return expires_at is not None and now > expires_at

    async def load(self, identity: str) -> PolicyState | None:
        """
        Load the state of an identity.

        Args:
            identity: The limiter identity.

        Returns:
            The stored state, or None if absent or expired.

        Raises:
            StorageUnavailableError: If the store is closed or the identity is invalid.
        """
        self._check_usable(identity)
        self._start_cleanup_task()

        with self._lock:
            entry = self._data.get(identity)
            if entry is None:
                return None

            state, expires_at = entry
            if self._is_expired(expires_at, self._clock()):
                del self._data[identity]
                return None

            return state

    async def save(self, identity: str, state: PolicyState, ttl: float | None = None) -> None:
        """
        Store the state of an identity.

        Args:
            identity: The limiter identity.
            state: The state to persist.
            ttl: Seconds to keep the state, or None to keep it until overwritten.

        Raises:
            StorageUnavailableError: If the store is closed, the identity is
                invalid, or the maximum number of identities is reached.
        """
        self._check_usable(identity)
        self._start_cleanup_task()

        if ttl is not None and ttl < 0:
            raise StorageUnavailableError("TTL must be non-negative", code="INVALID_TTL", details={"ttl": ttl})

        with self._lock:
            if identity not in self._data and len(self._data) >= self.max_keys:
                self.purge_expired()
                if len(self._data) >= self.max_keys:
                    raise StorageUnavailableError(
                        f"Maximum keys limit ({self.max_keys}) exceeded",
                        code="STORAGE_LIMIT_EXCEEDED",
                        details={"max_keys": self.max_keys},
                    )

            expires_at = self._clock() + ttl if ttl is not None else None
            self._data[identity] = (state, expires_at)

    def purge_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            The number of entries removed.
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._data.items() if self._is_expired(expires_at, now)]
            for key in expired:
                del self._data[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    async def close(self) -> None:
        """Stop the cleanup task and drop every state."""
        self._closed = True

        if self._cleanup_task and not self._cleanup_task.done():
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass

        with self._lock:
            self._data.clear()
