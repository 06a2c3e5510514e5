# ABOUTME: Policy type enumeration for the closed set of limiter algorithms
# ABOUTME: Values match the option names accepted by the configuration resolver

from enum import Enum


class PolicyType(str, Enum):
    """
    Enum for the supported limiter policies.
    """

    TOKEN_BUCKET = "token_bucket"
    FIXED_WINDOW = "fixed_window"
    SLIDING_WINDOW = "sliding_window"
    NO_LIMIT = "no_limit"
