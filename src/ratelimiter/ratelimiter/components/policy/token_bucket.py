# ABOUTME: Token bucket policy with continuous refill and a burst ceiling
# ABOUTME: Pure decision functions over TokenBucketState; no I/O and no clock access

"""Token bucket policy.

The bucket holds at most ``limit`` tokens and refills continuously at
``rate.amount`` tokens per ``rate.interval`` seconds. Requests spend tokens;
a request that does not fit is rejected with the time needed to refill the
missing tokens.

Reservations may push ``last_refill_at`` into the future. Such a state is read
as a debt: until that moment the bucket yields a negative token count, so no
consume can succeed before the reserved tokens have been paid back.
"""

from typing import Optional

from ratelimiter.components.policy.decision import Decision, ensure_within_max_wait
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.policy.state import TokenBucketState


def capacity(config: LimiterConfig) -> float:
    return float(config.limit)


def initial_state(config: LimiterConfig, now: float) -> TokenBucketState:
    """A new bucket starts full."""
    return TokenBucketState(available_tokens=float(config.limit), last_refill_at=now)


def available_tokens(config: LimiterConfig, state: TokenBucketState, now: float) -> float:
    """
    Tokens in the bucket at ``now``, capped at the burst ceiling.

    Negative while a reservation is outstanding.
    """
    refilled = state.available_tokens + config.rate.tokens_for_time(now - state.last_refill_at)
    return min(float(config.limit), refilled)


def consume(config: LimiterConfig, state: TokenBucketState, now: float, units: int) -> Decision:
    tokens = available_tokens(config, state, now)

    if tokens >= units:
        remaining = tokens - units
        return Decision(
            state=TokenBucketState(available_tokens=remaining, last_refill_at=now),
            accepted=True,
            remaining=remaining,
        )

    retry_after = config.rate.time_for_tokens(units - tokens)
    if now >= state.last_refill_at:
        state = TokenBucketState(available_tokens=tokens, last_refill_at=now)

    return Decision(state=state, accepted=False, remaining=max(0.0, tokens), retry_after=retry_after)


def reserve(
    config: LimiterConfig,
    state: TokenBucketState,
    now: float,
    units: int,
    max_wait: Optional[float] = None,
) -> Decision:
    """
    Grant ``units`` at the earliest moment they are available.

    The persisted state already accounts for the units at ``now + wait``.

    Raises:
        MaxWaitExceededError: If the wait exceeds ``max_wait``.
    """
    tokens = available_tokens(config, state, now)

    if tokens >= units:
        wait = 0.0
        remaining = tokens - units
        new_state = TokenBucketState(available_tokens=remaining, last_refill_at=now)
    else:
        wait = config.rate.time_for_tokens(units - tokens)
        remaining = 0.0
        new_state = TokenBucketState(available_tokens=0.0, last_refill_at=now + wait)

    ensure_within_max_wait(wait, max_wait)

    return Decision(state=new_state, accepted=True, remaining=remaining, wait=wait)


def state_ttl(config: LimiterConfig, state: TokenBucketState, now: float) -> float:
    """Seconds until the bucket is full again, after which the state is redundant."""
    debt = max(0.0, state.last_refill_at - now)
    return debt + config.rate.time_for_tokens(config.limit - state.available_tokens)
