# ABOUTME: Decision value produced by every policy function
# ABOUTME: Pairs the state to persist with the outcome reported to the caller

from dataclasses import dataclass
from typing import Optional

from ratelimiter.exceptions import MaxWaitExceededError
from ratelimiter.models.policy.state import PolicyState


@dataclass(frozen=True)
class Decision:
    """
    Outcome of applying a policy to a state.

    Attributes:
        state: The state to persist, or None when the policy keeps no state.
        accepted: Whether the units were granted (always True for reservations).
        remaining: Units left after the decision.
        retry_after: Seconds until a rejected request could succeed.
        wait: Seconds a reservation must wait before acting.
    """

    state: Optional[PolicyState]
    accepted: bool
    remaining: float
    retry_after: float = 0.0
    wait: float = 0.0


def ensure_within_max_wait(wait: float, max_wait: Optional[float]) -> None:
    """Refuse a reservation whose wait exceeds the caller's bound.

    Raises:
        MaxWaitExceededError: If ``max_wait`` is set and ``wait`` exceeds it.
    """
    if max_wait is not None and wait > max_wait:
        raise MaxWaitExceededError(
            f"Cannot reserve within {max_wait:.3f}s, the next slot is available in {wait:.3f}s",
            details={"wait_duration": wait, "max_wait": max_wait},
        )
