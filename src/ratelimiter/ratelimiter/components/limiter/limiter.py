# ABOUTME: Limiter orchestrator binding one policy to a state store and a lock guard
# ABOUTME: Runs the locked load, decide, save cycle behind consume and reserve

import time
from typing import Callable, Optional, Tuple

from loguru import logger

from ratelimiter.components import policy
from ratelimiter.components.policy.decision import Decision
from ratelimiter.config.settings import get_settings
from ratelimiter.exceptions import (
    InvalidRequestError,
    LockUnavailableError,
    MaxWaitExceededError,
    RateLimiterError,
    StorageUnavailableError,
)
from ratelimiter.implementations.noop.lock.lock_guard import NoOpLockGuard
from ratelimiter.interfaces.common.rate_limiter import AbstractRateLimiter
from ratelimiter.interfaces.lock.lock_guard import AbstractLockGuard
from ratelimiter.interfaces.storage.state_store import AbstractStateStore
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.limiter.result import RateLimitResult, Reservation
from ratelimiter.models.lock.token import LockToken
from ratelimiter.models.policy.state import PolicyState
from ratelimiter.models.types import Clock


class Limiter(AbstractRateLimiter):
    """
    Rate limiter for one identity.

    Every call reaching the policy runs the same cycle: acquire the identity's
    lock, load its state (seeding a fresh one when absent), apply the policy,
    save the new state, release the lock. The state is saved exactly once per
    call, accepted or rejected. Invalid requests and refused reservations
    change nothing.

    Infrastructure failures are never swallowed: store failures surface as
    `StorageUnavailableError`, lock failures as `LockUnavailableError`. Callers
    should treat both as "not accepted" unless they deliberately fail open.

    Without a lock guard the limiter falls back to `NoOpLockGuard`, which is
    only correct when a single caller uses the identity at a time.

    The no-limit policy keeps no state and skips the store and the guard.
    """

    def __init__(
        self,
        identity: str,
        config: LimiterConfig,
        store: AbstractStateStore,
        lock_guard: Optional[AbstractLockGuard] = None,
        clock: Clock = time.time,
        lock_timeout: Optional[float] = None,
    ):
        """
        Initialize the limiter.

        Args:
            identity: The identity whose budget is spent.
            config: Validated limiter configuration.
            store: Where the identity's state lives.
            lock_guard: Per-identity lock; defaults to a no-op guard.
            clock: Time source; must match the clock of the store.
            lock_timeout: Seconds to wait for the lock; defaults to the
                LOCK_TIMEOUT setting.
        """
        self._identity = identity
        self._config = config
        self._store = store
        self._lock_guard = lock_guard if lock_guard is not None else NoOpLockGuard(clock)
        self._clock = clock
        self._lock_timeout = lock_timeout if lock_timeout is not None else get_settings().LOCK_TIMEOUT
        self._logger = logger.bind(name=f"{__name__}.{identity}")

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def config(self) -> LimiterConfig:
        return self._config

    @property
    def limit(self) -> float:
        return policy.capacity(self._config)

    async def consume(self, units: int = 1) -> RateLimitResult:
        """
        Try to consume units right now.

        Args:
            units: The number of units to consume.

        Returns:
            The decision; a rejection carries `retry_after`.

        Raises:
            InvalidRequestError: If units is not a positive integer or exceeds the limit.
            StorageUnavailableError: If the state store fails.
            LockUnavailableError: If the identity lock cannot be acquired.
        """
        self._validate_units(units)

        decision, _ = await self._apply(lambda state, now: policy.consume(self._config, state, now, units))

        if decision.accepted:
            self._logger.debug(f"Accepted {units} unit(s), {decision.remaining} remaining")
        else:
            self._logger.debug(f"Rejected {units} unit(s), retry after {decision.retry_after:.3f}s")

        return RateLimitResult(
            identity=self._identity,
            accepted=decision.accepted,
            remaining=decision.remaining,
            retry_after=decision.retry_after,
            limit=self.limit,
        )

    async def reserve(self, units: int = 1, max_wait: float | None = None) -> Reservation:
        """
        Reserve units for the earliest moment they are available.

        Args:
            units: The number of units to reserve.
            max_wait: Longest acceptable wait in seconds, or None for no bound.

        Returns:
            The reservation; the caller waits `wait_duration` before acting.

        Raises:
            InvalidRequestError: If units or max_wait are invalid.
            MaxWaitExceededError: If the wait would exceed max_wait.
            ReserveNotSupportedError: If the policy does not support reservations.
            StorageUnavailableError: If the state store fails.
            LockUnavailableError: If the identity lock cannot be acquired.
        """
        self._validate_units(units)
        if max_wait is not None and max_wait < 0:
            raise InvalidRequestError(
                f"max_wait must be non-negative, got {max_wait}", details={"max_wait": max_wait}
            )

        try:
            decision, now = await self._apply(
                lambda state, now: policy.reserve(self._config, state, now, units, max_wait)
            )
        except MaxWaitExceededError as e:
            self._logger.info(f"Refused reservation of {units} unit(s): wait {e.wait_duration:.3f}s over {max_wait}s")
            raise
        self._logger.debug(f"Reserved {units} unit(s), wait {decision.wait:.3f}s")

        return Reservation(
            identity=self._identity,
            wait_duration=decision.wait,
            time_to_act=now + decision.wait,
            result=RateLimitResult(
                identity=self._identity,
                accepted=True,
                remaining=decision.remaining,
                limit=self.limit,
            ),
        )

    def _validate_units(self, units: int) -> None:
        if isinstance(units, bool) or not isinstance(units, int):
            raise InvalidRequestError(
                f"Units must be an integer, got {type(units).__name__}", details={"units": units}
            )
        if units <= 0:
            raise InvalidRequestError(f"Units must be positive, got {units}", details={"units": units})

        capacity = policy.capacity(self._config)
        if units > capacity:
            raise InvalidRequestError(
                f'Cannot use {units} unit(s) at once, the limit of "{self._identity}" is {self._config.limit}',
                details={"units": units, "limit": self._config.limit},
            )

    async def _apply(self, decide: Callable[[Optional[PolicyState], float], Decision]) -> Tuple[Decision, float]:
        if not policy.is_stateful(self._config):
            now = self._clock()
            return decide(None, now), now

        token = await self._acquire()
        try:
            state = await self._load()
            # read the clock under the lock so transitions are ordered in time
            now = self._clock()
            if state is None:
                state = policy.initial_state(self._config, now)

            decision = decide(state, now)
            await self._save(decision.state, policy.state_ttl(self._config, decision.state, now))
        except BaseException:
            # the error in flight wins over a failed release
            try:
                await self._release(token)
            except LockUnavailableError as release_error:
                self._logger.warning(f"Discarding release failure while another error propagates: {release_error}")
            raise

        await self._release(token)
        return decision, now

    async def _acquire(self) -> LockToken:
        try:
            return await self._lock_guard.acquire(self._identity, self._lock_timeout)
        except RateLimiterError:
            raise
        except Exception as e:
            self._logger.error(f"Lock guard failed to acquire: {e}")
            raise LockUnavailableError(
                f'Lock guard failed for "{self._identity}": {e}', details={"identity": self._identity}
            ) from e

    async def _release(self, token: LockToken) -> None:
        try:
            await self._lock_guard.release(token)
        except RateLimiterError:
            raise
        except Exception as e:
            self._logger.error(f"Lock guard failed to release: {e}")
            raise LockUnavailableError(
                f'Lock guard failed to release "{self._identity}": {e}', details={"identity": self._identity}
            ) from e

    async def _load(self) -> Optional[PolicyState]:
        try:
            state = await self._store.load(self._identity)
        except RateLimiterError:
            raise
        except Exception as e:
            self._logger.error(f"State store failed to load: {e}")
            raise StorageUnavailableError(
                f'Could not load the state of "{self._identity}": {e}', details={"identity": self._identity}
            ) from e

        if state is not None and state.policy != self._config.policy.value:
            self._logger.warning(
                f'Ignoring stored "{state.policy}" state, limiter uses "{self._config.policy.value}"'
            )
            return None
        return state

    async def _save(self, state: PolicyState, ttl: Optional[float]) -> None:
        try:
            await self._store.save(self._identity, state, ttl)
        except RateLimiterError:
            raise
        except Exception as e:
            self._logger.error(f"State store failed to save: {e}")
            raise StorageUnavailableError(
                f'Could not save the state of "{self._identity}": {e}', details={"identity": self._identity}
            ) from e
