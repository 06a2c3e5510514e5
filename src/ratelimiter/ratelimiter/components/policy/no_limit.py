# ABOUTME: No-limit policy that accepts every request
# ABOUTME: Explicit escape hatch; keeps no state and never touches the store

import math

from ratelimiter.components.policy.decision import Decision
from ratelimiter.models.limiter.config import LimiterConfig


def capacity(config: LimiterConfig) -> float:
    return math.inf


def initial_state(config: LimiterConfig, now: float) -> None:
    return None


def consume(config: LimiterConfig, state, now: float, units: int) -> Decision:
    return Decision(state=None, accepted=True, remaining=math.inf)


def reserve(config: LimiterConfig, state, now: float, units: int, max_wait=None) -> Decision:
    return Decision(state=None, accepted=True, remaining=math.inf, wait=0.0)


def state_ttl(config: LimiterConfig, state, now: float) -> None:
    return None
