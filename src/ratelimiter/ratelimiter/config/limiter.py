# ABOUTME: Option resolution for limiter definitions
# ABOUTME: Turns user-supplied options into an immutable LimiterConfig or a structured error

"""Limiter option resolution.

Limiter definitions arrive as plain mappings, typically from application
configuration files::

    {
        "id": "login",
        "policy": "token_bucket",
        "limit": 10,
        "rate": {"amount": 10, "interval": "1 minute"},
    }

`resolve_limiter_config` validates and normalises such a mapping. Durations
may be given as `timedelta`, as a positive number of seconds, or as a relative
string like ``"30 seconds"`` or ``"1 hour 30 minutes"``. The limiter itself only
ever sees float seconds.
"""

import re
from datetime import timedelta
from typing import Any, Mapping

from pydantic import ValidationError

from ratelimiter.exceptions import InvalidConfigurationError
from ratelimiter.models.limiter.config import LimiterConfig, Rate
from ratelimiter.models.policy.enum import PolicyType
from ratelimiter.models.types import DurationInput

ALLOWED_OPTIONS = frozenset({"id", "policy", "limit", "interval", "rate"})
REQUIRED_OPTIONS = ("id", "policy")
ALLOWED_RATE_OPTIONS = frozenset({"amount", "interval"})

_UNIT_SECONDS = {
    "ms": 0.001,
    "msec": 0.001,
    "millisecond": 0.001,
    "s": 1.0,
    "sec": 1.0,
    "second": 1.0,
    "m": 60.0,
    "min": 60.0,
    "minute": 60.0,
    "h": 3600.0,
    "hour": 3600.0,
    "d": 86400.0,
    "day": 86400.0,
    "w": 604800.0,
    "week": 604800.0,
}

_DURATION_PART = re.compile(r"\s*(?P<amount>\d+(?:\.\d+)?)?\s*(?P<unit>[a-z]+)\s*,?", re.IGNORECASE)


def _unit_seconds(unit: str) -> float | None:
    unit = unit.lower()
    if unit in _UNIT_SECONDS:
        return _UNIT_SECONDS[unit]
    # plural forms: "seconds", "mins", "hours"
    if unit.endswith("s") and unit[:-1] in _UNIT_SECONDS:
        return _UNIT_SECONDS[unit[:-1]]
    return None


def parse_duration(value: DurationInput, option: str = "interval") -> float:
    """
    Convert a duration option into positive float seconds.

    Args:
        value: A timedelta, a number of seconds, or a relative string such as
            "1 minute", "90 seconds", "1 hour 30 minutes", "1.5 hours" or "day".
        option: Option name used in error messages.

    Returns:
        The duration in seconds.

    Raises:
        InvalidConfigurationError: If the value cannot be parsed or is not positive.
    """
    if isinstance(value, bool):
        raise InvalidConfigurationError(
            f'Option "{option}" must be a duration, got a boolean', details={"option": option, "value": value}
        )

    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        seconds = _parse_relative_string(value, option)
    else:
        raise InvalidConfigurationError(
            f'Option "{option}" must be a duration, got {type(value).__name__}',
            details={"option": option, "value": value},
        )

    if not seconds > 0:
        raise InvalidConfigurationError(
            f'Option "{option}" must be a positive duration, got {value!r}',
            details={"option": option, "value": value},
        )
    return seconds


def _parse_relative_string(value: str, option: str) -> float:
    text = value.strip()
    if text.startswith("+"):
        text = text[1:]
    if re.fullmatch(r"\d+(?:\.\d+)?", text):
        return float(text)

    position = 0
    total = 0.0
    matched = False
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None or match.end() == position:
            break
        unit_seconds = _unit_seconds(match.group("unit"))
        if unit_seconds is None:
            break
        amount = float(match.group("amount")) if match.group("amount") else 1.0
        total += amount * unit_seconds
        position = match.end()
        matched = True

    if not matched or text[position:].strip():
        raise InvalidConfigurationError(
            f'Cannot parse interval "{value}", please use a relative format such as "30 seconds" or "1 hour"',
            details={"option": option, "value": value},
        )
    return total


def _resolve_rate(rate: Any) -> Rate | dict[str, Any] | None:
    if rate is None:
        return None
    if isinstance(rate, Rate):
        return rate
    if not isinstance(rate, Mapping):
        raise InvalidConfigurationError(
            'Option "rate" must be a mapping with "amount" and "interval"', details={"option": "rate", "value": rate}
        )

    unknown = set(rate) - ALLOWED_RATE_OPTIONS
    if unknown:
        raise InvalidConfigurationError(
            f'Unknown rate option(s): {", ".join(sorted(unknown))}',
            details={"option": "rate", "unknown": sorted(unknown)},
        )

    # A rate without interval is treated as absent.
    if rate.get("interval") is None:
        return None

    amount = rate.get("amount", 1)
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidConfigurationError(
            'Option "rate.amount" must be an integer', details={"option": "rate.amount", "value": amount}
        )

    return {"amount": amount, "interval": parse_duration(rate["interval"], "rate.interval")}


def resolve_limiter_config(options: Mapping[str, Any] | LimiterConfig) -> LimiterConfig:
    """
    Validate limiter options and build the immutable configuration.

    Args:
        options: Mapping with the keys ``id``, ``policy``, ``limit``,
            ``interval`` and ``rate``. A LimiterConfig is returned unchanged.

    Returns:
        A validated LimiterConfig.

    Raises:
        InvalidConfigurationError: For unknown or missing options, unknown
            policies, malformed durations, or policy requirements not met.
    """
    if isinstance(options, LimiterConfig):
        return options

    unknown = set(options) - ALLOWED_OPTIONS
    if unknown:
        raise InvalidConfigurationError(
            f'Unknown option(s): {", ".join(sorted(unknown))}; allowed options are {", ".join(sorted(ALLOWED_OPTIONS))}',
            details={"unknown": sorted(unknown)},
        )

    missing = [name for name in REQUIRED_OPTIONS if options.get(name) is None]
    if missing:
        raise InvalidConfigurationError(
            f'Missing required option(s): {", ".join(missing)}', details={"missing": missing}
        )

    policy = options["policy"]
    allowed_policies = [p.value for p in PolicyType]
    if policy not in allowed_policies:
        raise InvalidConfigurationError(
            f'Limiter policy "{policy}" does not exist, it must be one of {", ".join(allowed_policies)}',
            details={"option": "policy", "value": policy, "allowed": allowed_policies},
        )

    limit = options.get("limit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
        raise InvalidConfigurationError('Option "limit" must be an integer', details={"option": "limit", "value": limit})

    interval = options.get("interval")
    data = {
        "id": options["id"],
        "policy": PolicyType(policy),
        "limit": limit,
        "interval": parse_duration(interval) if interval is not None else None,
        "rate": _resolve_rate(options.get("rate")),
    }

    try:
        return LimiterConfig(**data)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f'Invalid configuration for limiter "{options["id"]}": {e.error_count()} error(s)',
            details={"errors": e.errors(include_url=False)},
        ) from e
