# ABOUTME: pytest configuration for rate limiter tests
# ABOUTME: Configures timeouts per test type and shares clock, store and guard fixtures

import pytest
import pytest_asyncio

from ratelimiter.implementations.memory.lock.lock_guard import InMemoryLockGuard
from ratelimiter.implementations.memory.storage.state_store import InMemoryStateStore
from tests.fixtures.clock import ManualClock


def pytest_collection_modifyitems(config, items):
    """Modify test items to add appropriate timeouts based on test type."""
    for item in items:
        # Respect explicit timeout markers
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif any(item.get_closest_marker(mark) for mark in ["integration", "contract"]):
            item.add_marker(pytest.mark.timeout(60))


@pytest.fixture
def clock() -> ManualClock:
    """A clock starting at t=0 that only moves when advanced."""
    return ManualClock()


@pytest_asyncio.fixture
async def memory_store(clock):
    """In-memory state store sharing the manual clock."""
    store = InMemoryStateStore(cleanup_interval=60.0, clock=clock)
    yield store
    await store.close()


@pytest.fixture
def memory_guard(clock) -> InMemoryLockGuard:
    return InMemoryLockGuard(clock=clock)
