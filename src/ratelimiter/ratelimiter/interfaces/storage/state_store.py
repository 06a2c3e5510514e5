# ABOUTME: Abstract state store interface for per-identity limiter state
# ABOUTME: Defines the load/save contract every storage backend must honour

from abc import ABC, abstractmethod

from ratelimiter.models.policy.state import PolicyState


class AbstractStateStore(ABC):
    """
    [L0] Abstract base interface for limiter state storage.

    A store holds, per identity, the minimal numeric state of one policy. It is
    the only place limiter state lives; limiters keep nothing between calls.
    Stores do not serialise access: callers must go through a lock guard
    before a load/save pair.

    Both operations are expected to be fast and to fail with
    `StorageUnavailableError` rather than hang.
    """

    @abstractmethod
    async def load(self, identity: str) -> PolicyState | None:
        """Load the state stored for an identity.

        Args:
            identity (str): The limiter identity.

        Returns:
            PolicyState | None: The stored state, or None if there is none or it expired.

        Raises:
            StorageUnavailableError: If the backend cannot be read.
        """
        pass

    @abstractmethod
    async def save(self, identity: str, state: PolicyState, ttl: float | None = None) -> None:
        """Store the state of an identity, replacing any previous state.

        Args:
            identity (str): The limiter identity.
            state (PolicyState): The state to persist.
            ttl (float | None): Seconds after which the state may be discarded.
                None keeps it until overwritten.

        Raises:
            StorageUnavailableError: If the backend cannot be written.
        """
        pass
