# ABOUTME: Sliding window policy interpolating between two adjacent fixed windows
# ABOUTME: Pure decision functions over SlidingWindowState; no I/O and no clock access

"""Sliding window policy.

Approximates a window trailing ``now`` by weighting the previous fixed window
with the share of it still covered by the trailing interval::

    weighted = previous_hits * (1 - elapsed_fraction) + current_hits

where ``elapsed_fraction`` is the share of the current window already elapsed.
The state stays O(1) per identity at the cost of assuming hits of the previous
window were evenly spread.
"""

import math

from ratelimiter.components.policy.decision import Decision
from ratelimiter.exceptions import ReserveNotSupportedError
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.policy.state import SlidingWindowState


def capacity(config: LimiterConfig) -> float:
    return float(config.limit)


def initial_state(config: LimiterConfig, now: float) -> SlidingWindowState:
    return SlidingWindowState(current_hits=0, current_window_start_at=now, previous_hits=0)


def shift(config: LimiterConfig, state: SlidingWindowState, now: float) -> SlidingWindowState:
    """
    Move the state to the window containing ``now``.

    The current window becomes the previous one only when the two are
    adjacent; a window that is further back no longer contributes.
    """
    elapsed = now - state.current_window_start_at
    if elapsed < config.interval:
        return state

    windows = math.floor(elapsed / config.interval)
    window_start_at = state.current_window_start_at + windows * config.interval
    if window_start_at > now:
        windows -= 1
        window_start_at -= config.interval

    return SlidingWindowState(
        current_hits=0,
        current_window_start_at=window_start_at,
        previous_hits=state.current_hits if windows == 1 else 0,
    )


def elapsed_fraction(config: LimiterConfig, state: SlidingWindowState, now: float) -> float:
    fraction = (now - state.current_window_start_at) / config.interval
    return min(max(fraction, 0.0), 1.0)


def weighted_hits(config: LimiterConfig, state: SlidingWindowState, now: float) -> float:
    """Interpolated hit count of the interval trailing ``now``."""
    return state.previous_hits * (1.0 - elapsed_fraction(config, state, now)) + state.current_hits


def time_until_available(config: LimiterConfig, state: SlidingWindowState, now: float, units: int) -> float:
    """
    Seconds until ``weighted_hits + units`` fits within the limit.

    Solves the interpolation formula for the elapsed fraction, either within the
    current window (only the previous window decays) or within the next one
    (the current window becomes the decaying one).
    """
    budget = config.limit - units - state.current_hits
    if budget >= 0:
        if state.previous_hits == 0:
            return 0.0
        fraction = max(0.0, 1.0 - budget / state.previous_hits)
        return max(0.0, state.current_window_start_at + fraction * config.interval - now)

    next_window_start_at = state.current_window_start_at + config.interval
    fraction = max(0.0, 1.0 - (config.limit - units) / state.current_hits)
    return max(0.0, next_window_start_at + fraction * config.interval - now)


def consume(config: LimiterConfig, state: SlidingWindowState, now: float, units: int) -> Decision:
    state = shift(config, state, now)
    weighted = weighted_hits(config, state, now)

    if weighted + units <= config.limit:
        return Decision(
            state=state.model_copy(update={"current_hits": state.current_hits + units}),
            accepted=True,
            remaining=max(0.0, config.limit - weighted - units),
        )

    return Decision(
        state=state,
        accepted=False,
        remaining=max(0.0, config.limit - weighted),
        retry_after=time_until_available(config, state, now, units),
    )


def reserve(config: LimiterConfig, state: SlidingWindowState, now: float, units: int, max_wait=None) -> Decision:
    raise ReserveNotSupportedError(
        f'Reserving is not supported by the "{config.policy.value}" policy',
        details={"policy": config.policy.value},
    )


def state_ttl(config: LimiterConfig, state: SlidingWindowState, now: float) -> float:
    """The current window keeps weighing on the next one, so keep two windows."""
    return max(0.0, state.current_window_start_at + 2 * config.interval - now)
