# ABOUTME: Factory building per-key limiters from one limiter definition
# ABOUTME: Resolves options once and shares the store and lock guard across created limiters

import time
from typing import Any, Mapping, Optional

from loguru import logger

from ratelimiter.components.limiter.limiter import Limiter
from ratelimiter.config.limiter import resolve_limiter_config
from ratelimiter.implementations.noop.lock.lock_guard import NoOpLockGuard
from ratelimiter.interfaces.common.rate_limiter import AbstractRateLimiter
from ratelimiter.interfaces.lock.lock_guard import AbstractLockGuard
from ratelimiter.interfaces.storage.state_store import AbstractStateStore
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.types import Clock


class RateLimiterFactory:
    """
    Builds limiters sharing one definition, one store and one lock guard.

    Each created limiter spends the budget of ``"{id}-{key}"``, so keys such as
    a user name or a client address get independent budgets::

        factory = RateLimiterFactory(
            {"id": "login", "policy": "sliding_window", "limit": 5, "interval": "15 minutes"},
            InMemoryStateStore(),
            InMemoryLockGuard(),
        )
        result = await factory.create(username).consume()

    Without a lock guard, limiters use `NoOpLockGuard`; that is only correct
    for single-task, single-process use.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | LimiterConfig,
        store: AbstractStateStore,
        lock_guard: Optional[AbstractLockGuard] = None,
        clock: Clock = time.time,
        lock_timeout: Optional[float] = None,
    ):
        """
        Initialize the factory.

        Args:
            options: Limiter options or an already resolved configuration.
            store: State store shared by all created limiters.
            lock_guard: Lock guard shared by all created limiters.
            clock: Time source of the created limiters.
            lock_timeout: Seconds to wait for a lock; defaults to the LOCK_TIMEOUT setting.

        Raises:
            InvalidConfigurationError: If the options are invalid.
        """
        self._config = resolve_limiter_config(options)
        self._store = store
        self._lock_guard = lock_guard if lock_guard is not None else NoOpLockGuard(clock)
        self._clock = clock
        self._lock_timeout = lock_timeout
        logger.bind(name=__name__).debug(
            f'Limiter factory "{self._config.id}" ready with policy "{self._config.policy.value}"'
        )

    @property
    def config(self) -> LimiterConfig:
        return self._config

    def create(self, key: Optional[str] = None) -> AbstractRateLimiter:
        """
        Create the limiter of one key.

        Args:
            key: Discriminator appended to the configured id; None shares the
                budget of the bare id.

        Returns:
            A limiter for identity ``"{id}-{key}"``.
        """
        identity = f"{self._config.id}-{key if key is not None else ''}"
        return Limiter(
            identity=identity,
            config=self._config,
            store=self._store,
            lock_guard=self._lock_guard,
            clock=self._clock,
            lock_timeout=self._lock_timeout,
        )
