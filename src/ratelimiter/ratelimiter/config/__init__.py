# ABOUTME: Configuration package initialization
# ABOUTME: Exports settings, logging setup and limiter option resolution

from ratelimiter.config.settings import RateLimiterSettings, get_settings
from ratelimiter.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)
from ratelimiter.config.limiter import parse_duration, resolve_limiter_config

__all__ = [
    "RateLimiterSettings",
    "get_settings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
    "parse_duration",
    "resolve_limiter_config",
]
