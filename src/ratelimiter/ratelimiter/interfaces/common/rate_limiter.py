# ABOUTME: Abstract rate limiter interface exposed to callers
# ABOUTME: Defines consume and reserve for one limiter identity

from abc import abstractmethod, ABC

from ratelimiter.models.limiter.result import RateLimitResult, Reservation


class AbstractRateLimiter(ABC):
    """
    [L0] Abstract base class for a rate limiter bound to one identity.

    Concrete implementations decide admissions with a specific policy
    (token bucket, sliding window, fixed window, or no limit).

    Architecture note: This is a [L0] interface that only depends on models
    and provides clean abstractions for [L2] component implementations.
    """

    @property
    @abstractmethod
    def identity(self) -> str:
        """The identity whose budget this limiter spends."""
        pass

    @abstractmethod
    async def consume(self, units: int = 1) -> RateLimitResult:
        """
        Try to consume units right now.

        This method never waits. A rejection is reported through the returned
        result, not by raising.

        Args:
            units (int): The number of units to consume. Defaults to 1.

        Returns:
            RateLimitResult: The decision, the remaining budget and a retry hint.

        Raises:
            InvalidRequestError: If units is not positive or exceeds the absolute capacity.
            StorageUnavailableError: If the state store fails.
            LockUnavailableError: If the identity lock cannot be acquired.
        """
        pass

    @abstractmethod
    async def reserve(self, units: int = 1, max_wait: float | None = None) -> Reservation:
        """
        Reserve units for a future moment.

        The units are accounted for immediately. This method does not wait
        itself: callers suspend for `Reservation.wait_duration` (for instance
        with `await reservation.wait()`) before acting.

        Args:
            units (int): The number of units to reserve. Defaults to 1.
            max_wait (float | None): Longest acceptable wait in seconds.

        Returns:
            Reservation: The wait duration and the budget snapshot.

        Raises:
            InvalidRequestError: If units is not positive or exceeds the absolute capacity.
            MaxWaitExceededError: If the wait would exceed max_wait; nothing is reserved.
            ReserveNotSupportedError: If the policy cannot hand out reservations.
            StorageUnavailableError: If the state store fails.
            LockUnavailableError: If the identity lock cannot be acquired.
        """
        pass
