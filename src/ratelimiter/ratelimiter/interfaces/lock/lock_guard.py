# ABOUTME: Abstract per-identity mutual-exclusion guard interface
# ABOUTME: Defines the acquire/release contract that serialises state transitions

from abc import ABC, abstractmethod

from ratelimiter.models.lock.token import LockToken


class AbstractLockGuard(ABC):
    """
    [L0] Abstract base interface for per-identity advisory locks.

    A guard serialises the load, decide, save sequence of one identity so that
    concurrent callers never both spend the same capacity. Different
    identities never contend with each other.

    Guards must never silently degrade to unsynchronised access: if the lock
    cannot be obtained, `acquire` fails with `LockUnavailableError`.
    """

    @abstractmethod
    async def acquire(self, identity: str, timeout: float | None = None) -> LockToken:
        """Acquire the lock of an identity.

        Args:
            identity (str): The limiter identity to lock.
            timeout (float | None): Maximum seconds to wait. None waits indefinitely.

        Returns:
            LockToken: The token to pass to `release`.

        Raises:
            LockUnavailableError: If the lock cannot be acquired within the timeout
                or the lock service is unavailable.
        """
        pass

    @abstractmethod
    async def release(self, token: LockToken) -> None:
        """Release a lock previously acquired.

        Args:
            token (LockToken): The token returned by `acquire`.

        Raises:
            LockUnavailableError: If the token is unknown or was already released.
        """
        pass
