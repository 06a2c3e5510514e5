# ABOUTME: Fixed window policy counting hits in consecutive non-overlapping windows
# ABOUTME: Pure decision functions over FixedWindowState; no I/O and no clock access

"""Fixed window policy.

Hits are counted in consecutive windows of ``interval`` seconds. Windows stay
aligned to the first window of the identity: when time moves past the end of
a window, the state jumps to the window containing ``now``.

Two adjacent windows may together accept up to ``2 * limit`` units around
their shared boundary. Use the sliding window policy when that burst is not
acceptable.
"""

import math
from typing import Optional

from ratelimiter.components.policy.decision import Decision, ensure_within_max_wait
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.policy.state import FixedWindowState


def capacity(config: LimiterConfig) -> float:
    return float(config.limit)


def initial_state(config: LimiterConfig, now: float) -> FixedWindowState:
    return FixedWindowState(hits=0, window_start_at=now)


def roll_forward(config: LimiterConfig, state: FixedWindowState, now: float) -> FixedWindowState:
    """Move an expired state to the window containing ``now``, with no hits."""
    elapsed = now - state.window_start_at
    if elapsed < config.interval:
        return state

    windows = math.floor(elapsed / config.interval)
    window_start_at = state.window_start_at + windows * config.interval
    # float division may overshoot by one window
    if window_start_at > now:
        window_start_at -= config.interval

    return FixedWindowState(hits=0, window_start_at=window_start_at)


def consume(config: LimiterConfig, state: FixedWindowState, now: float, units: int) -> Decision:
    # a reservation booked a later window, so the current one is full
    if now < state.window_start_at:
        return Decision(
            state=state,
            accepted=False,
            remaining=0.0,
            retry_after=state.window_start_at - now,
        )

    state = roll_forward(config, state, now)

    if state.hits + units <= config.limit:
        hits = state.hits + units
        return Decision(
            state=state.model_copy(update={"hits": hits}),
            accepted=True,
            remaining=float(config.limit - hits),
        )

    retry_after = max(0.0, state.window_start_at + config.interval - now)
    return Decision(
        state=state,
        accepted=False,
        remaining=float(max(0, config.limit - state.hits)),
        retry_after=retry_after,
    )


def reserve(
    config: LimiterConfig,
    state: FixedWindowState,
    now: float,
    units: int,
    max_wait: Optional[float] = None,
) -> Decision:
    """
    Grant ``units`` in the first window that can hold them.

    When the current window is too full the units are booked in the next
    window, whose opening is the wait. Until that window opens, ``consume``
    rejects.

    Raises:
        MaxWaitExceededError: If the wait exceeds ``max_wait``.
    """
    state = roll_forward(config, state, now)

    if state.hits + units <= config.limit:
        new_state = state.model_copy(update={"hits": state.hits + units})
    else:
        new_state = FixedWindowState(hits=units, window_start_at=state.window_start_at + config.interval)

    wait = max(0.0, new_state.window_start_at - now)
    ensure_within_max_wait(wait, max_wait)

    return Decision(
        state=new_state,
        accepted=True,
        remaining=float(config.limit - new_state.hits),
        wait=wait,
    )


def state_ttl(config: LimiterConfig, state: FixedWindowState, now: float) -> float:
    """Seconds until the stored window closes."""
    return max(0.0, state.window_start_at + config.interval - now)
