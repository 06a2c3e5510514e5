# ABOUTME: Integration tests for concurrent callers sharing one identity
# ABOUTME: Verifies the lock guard prevents double grants across tasks

import asyncio

import pytest

from ratelimiter import InMemoryLockGuard, InMemoryStateStore, RateLimiterFactory
from ratelimiter.interfaces.storage.state_store import AbstractStateStore


class SlowStateStore(AbstractStateStore):
    """Delegating store that yields to the event loop on every call."""

    def __init__(self, inner: AbstractStateStore, delay: float = 0.001):
        self._inner = inner
        self._delay = delay

    async def load(self, identity):
        await asyncio.sleep(self._delay)
        return await self._inner.load(identity)

    async def save(self, identity, state, ttl=None):
        await asyncio.sleep(self._delay)
        await self._inner.save(identity, state, ttl)


@pytest.mark.integration
@pytest.mark.concurrency
class TestConcurrentConsume:
    """Concurrent consume calls on the same identity."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options",
        [
            {"id": "burst", "policy": "token_bucket", "limit": 10, "rate": {"amount": 1, "interval": "1 hour"}},
            {"id": "burst", "policy": "fixed_window", "limit": 10, "interval": "1 hour"},
            {"id": "burst", "policy": "sliding_window", "limit": 10, "interval": "1 hour"},
        ],
        ids=["token_bucket", "fixed_window", "sliding_window"],
    )
    async def test_no_double_grants(self, clock, options):
        store = InMemoryStateStore(clock=clock)
        factory = RateLimiterFactory(options, SlowStateStore(store), InMemoryLockGuard(clock), clock=clock)

        try:
            results = await asyncio.gather(*(factory.create("shared").consume() for _ in range(50)))
        finally:
            await store.close()

        assert sum(result.accepted for result in results) == 10

    @pytest.mark.asyncio
    async def test_without_guard_lost_updates_are_possible(self, clock):
        """The no-op guard offers no protection; this documents why a real guard is needed."""
        store = InMemoryStateStore(clock=clock)
        options = {"id": "burst", "policy": "fixed_window", "limit": 10, "interval": "1 hour"}
        factory = RateLimiterFactory(options, SlowStateStore(store), clock=clock)

        try:
            results = await asyncio.gather(*(factory.create("shared").consume() for _ in range(50)))
        finally:
            await store.close()

        assert sum(result.accepted for result in results) > 10

    @pytest.mark.asyncio
    async def test_concurrent_reservations_are_spaced(self, clock):
        store = InMemoryStateStore(clock=clock)
        options = {"id": "jobs", "policy": "token_bucket", "limit": 1, "rate": {"amount": 1, "interval": "2 seconds"}}
        factory = RateLimiterFactory(options, SlowStateStore(store), InMemoryLockGuard(clock), clock=clock)

        try:
            reservations = await asyncio.gather(*(factory.create("worker").reserve() for _ in range(5)))
        finally:
            await store.close()

        waits = sorted(reservation.wait_duration for reservation in reservations)
        assert waits == pytest.approx([0.0, 2.0, 4.0, 6.0, 8.0])

    @pytest.mark.asyncio
    async def test_contended_lock_times_out(self, clock):
        store = InMemoryStateStore(clock=clock)
        guard = InMemoryLockGuard(clock)
        options = {"id": "slow", "policy": "fixed_window", "limit": 10, "interval": "1 hour"}
        factory = RateLimiterFactory(options, SlowStateStore(store, delay=0.2), guard, clock=clock, lock_timeout=0.01)

        try:
            results = await asyncio.gather(
                *(factory.create("shared").consume() for _ in range(3)), return_exceptions=True
            )
        finally:
            await store.close()

        errors = [result for result in results if isinstance(result, Exception)]
        assert len(errors) == 2
        assert all(error.code == "LOCK_UNAVAILABLE" for error in errors)
