# ABOUTME: Policy dispatch over the closed set of limiter algorithms
# ABOUTME: Routes every decision to the policy module selected by LimiterConfig.policy

"""Limiter policies.

Each policy is a module of pure functions over its own state model:
``capacity``, ``initial_state``, ``consume``, ``reserve`` and ``state_ttl``.
The functions below select the module with an explicit branch on
`PolicyType`, so adding a policy means extending that branch and nothing else.
"""

from types import ModuleType
from typing import Optional

from ratelimiter.components.policy import fixed_window, no_limit, sliding_window, token_bucket
from ratelimiter.components.policy.decision import Decision
from ratelimiter.models.limiter.config import LimiterConfig
from ratelimiter.models.policy.enum import PolicyType
from ratelimiter.models.policy.state import PolicyState


def policy_module(policy: PolicyType) -> ModuleType:
    if policy is PolicyType.TOKEN_BUCKET:
        return token_bucket
    elif policy is PolicyType.FIXED_WINDOW:
        return fixed_window
    elif policy is PolicyType.SLIDING_WINDOW:
        return sliding_window
    elif policy is PolicyType.NO_LIMIT:
        return no_limit
    raise ValueError(f"Unknown limiter policy: {policy!r}")


def is_stateful(config: LimiterConfig) -> bool:
    return config.policy is not PolicyType.NO_LIMIT


def capacity(config: LimiterConfig) -> float:
    """Largest unit count a single request may ever be granted."""
    return policy_module(config.policy).capacity(config)


def initial_state(config: LimiterConfig, now: float) -> Optional[PolicyState]:
    return policy_module(config.policy).initial_state(config, now)


def consume(config: LimiterConfig, state: Optional[PolicyState], now: float, units: int) -> Decision:
    return policy_module(config.policy).consume(config, state, now, units)


def reserve(
    config: LimiterConfig,
    state: Optional[PolicyState],
    now: float,
    units: int,
    max_wait: Optional[float] = None,
) -> Decision:
    return policy_module(config.policy).reserve(config, state, now, units, max_wait)


def state_ttl(config: LimiterConfig, state: Optional[PolicyState], now: float) -> Optional[float]:
    return policy_module(config.policy).state_ttl(config, state, now)


__all__ = [
    "Decision",
    "policy_module",
    "is_stateful",
    "capacity",
    "initial_state",
    "consume",
    "reserve",
    "state_ttl",
]
