# ABOUTME: NoOp implementation of AbstractStateStore that remembers nothing
# ABOUTME: Every load finds no state, so every decision starts from a fresh state

from ratelimiter.interfaces.storage.state_store import AbstractStateStore
from ratelimiter.models.policy.state import PolicyState


class NoOpStateStore(AbstractStateStore):
    """
    No-operation implementation of AbstractStateStore.

    Saved states are discarded. A limiter backed by this store evaluates every
    request against a fresh state (a full bucket or an empty window), so every
    request within the limit is accepted.

    Use Cases:
    - Disabling throttling while keeping the limiter wiring in place
    - Tests that need a store without side effects
    """

    async def load(self, identity: str) -> PolicyState | None:
        """Always returns None."""
        return None

    async def save(self, identity: str, state: PolicyState, ttl: float | None = None) -> None:
        """Discards the state."""
        pass
