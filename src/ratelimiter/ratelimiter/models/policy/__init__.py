# ABOUTME: Policy models package exports
# ABOUTME: Exports the policy tag and the persisted per-policy states

from .enum import PolicyType
from .state import (
    TokenBucketState,
    FixedWindowState,
    SlidingWindowState,
    PolicyState,
    parse_policy_state,
)

__all__ = [
    "PolicyType",
    "TokenBucketState",
    "FixedWindowState",
    "SlidingWindowState",
    "PolicyState",
    "parse_policy_state",
]
