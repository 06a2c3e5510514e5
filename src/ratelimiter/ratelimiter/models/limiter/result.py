# ABOUTME: RateLimitResult and Reservation models returned by limiters
# ABOUTME: Immutable decision values; rejection is a value, never an exception

import asyncio
import math

from pydantic import BaseModel, ConfigDict, Field

from ratelimiter.exceptions import RateLimitExceededError


class RateLimitResult(BaseModel):
    """
    Outcome of a single admission decision.

    A rejected result carries ``retry_after`` so callers can schedule a retry
    without polling. Results are never persisted.
    """

    identity: str = Field(description="Identity whose budget was consulted")
    accepted: bool = Field(description="Whether the requested units were granted")
    remaining: float = Field(ge=0, description="Units still available after this decision")
    retry_after: float = Field(default=0.0, ge=0, description="Seconds until the request could succeed")
    limit: float = Field(description="Configured limit, inf when unlimited")

    model_config = ConfigDict(frozen=True)

    def ensure_accepted(self) -> "RateLimitResult":
        """
        Return the result unchanged when accepted.

        Raises:
            RateLimitExceededError: If the result is a rejection.
        """
        if not self.accepted:
            raise RateLimitExceededError(
                f'Rate limit exceeded for "{self.identity}", retry after {self.retry_after:.3f}s',
                result=self,
                details={"identity": self.identity, "retry_after": self.retry_after, "limit": self.limit},
            )
        return self

    def retry_at(self, now: float) -> float:
        """Timestamp at which a retry could succeed, relative to ``now``."""
        return now + self.retry_after

    @property
    def is_unlimited(self) -> bool:
        return math.isinf(self.limit)

    async def wait(self) -> None:
        """Suspend the calling task for ``retry_after`` seconds."""
        if self.retry_after > 0:
            await asyncio.sleep(self.retry_after)


class Reservation(BaseModel):
    """
    Capacity granted for a future moment.

    The units are already accounted for in the limiter's state. The caller
    must not act before ``wait_duration`` has elapsed; cancelling that wait
    forfeits the units and never hands them back.
    """

    identity: str = Field(description="Identity whose budget was reserved")
    wait_duration: float = Field(ge=0, description="Seconds to wait before acting")
    time_to_act: float = Field(description="Timestamp from which the caller may act")
    result: RateLimitResult = Field(description="Snapshot of the budget at time_to_act")

    model_config = ConfigDict(frozen=True)

    async def wait(self) -> None:
        """Suspend the calling task until the reservation may be used."""
        if self.wait_duration > 0:
            await asyncio.sleep(self.wait_duration)
