# ABOUTME: Main configuration composition for the rate limiter library
# ABOUTME: Adds lock and store tuning knobs on top of the base settings

from functools import lru_cache

from pydantic import Field

from ._base import BaseCoreSettings


class RateLimiterSettings(BaseCoreSettings):
    """Represents the complete, composed configuration for the rate limiter.

    Extends `BaseCoreSettings` with the tuning parameters of the lock guard and
    the in-memory state store. Individual limiter definitions (policy, limit,
    interval) are not settings; they are resolved by
    `ratelimiter.config.limiter.resolve_limiter_config`.

    Attributes:
        LOCK_TIMEOUT: Seconds to wait for the per-identity lock before failing
            with `LockUnavailableError`.
        STORE_CLEANUP_INTERVAL: Seconds between sweeps of expired entries in
            the in-memory store.
        STORE_MAX_KEYS: Maximum number of identities held by the in-memory store.
    """

    LOCK_TIMEOUT: float = Field(
        default=3.0,
        gt=0,
        description="Seconds to wait for a per-identity lock before giving up.",
    )
    STORE_CLEANUP_INTERVAL: float = Field(
        default=60.0,
        gt=0,
        description="Seconds between sweeps of expired in-memory state.",
    )
    STORE_MAX_KEYS: int = Field(
        default=10000,
        gt=0,
        description="Maximum number of identities kept by the in-memory store.",
    )


@lru_cache
def get_settings() -> RateLimiterSettings:
    """Provides a singleton instance of the rate limiter settings.

    The `lru_cache` guarantees environment variables and `.env` files are read
    only once per process.

    Returns:
        A single, cached instance of the RateLimiterSettings class.
    """
    return RateLimiterSettings()
