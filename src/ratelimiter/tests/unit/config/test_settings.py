# ABOUTME: Unit tests for RateLimiterSettings and the base settings it composes
# ABOUTME: Tests defaults, alias normalisation, environment loading and the cached accessor

import pytest
from pydantic import ValidationError

from ratelimiter.config._base import BaseCoreSettings
from ratelimiter.config.settings import RateLimiterSettings, get_settings


class TestBaseCoreSettings:
    """Test suite for the shared base settings."""

    @pytest.mark.unit
    @pytest.mark.config
    def test_default_values(self):
        settings = BaseCoreSettings()

        assert settings.APP_NAME == "RateLimiter"
        assert settings.ENV == "development"
        assert settings.DEBUG is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "txt"

    @pytest.mark.unit
    @pytest.mark.config
    @pytest.mark.parametrize(
        "raw, expected",
        [("DEV", "development"), ("develop", "development"), ("prod", "production"), (" Stage ", "staging")],
    )
    def test_env_aliases(self, raw, expected):
        assert BaseCoreSettings(ENV=raw).ENV == expected

    @pytest.mark.unit
    @pytest.mark.config
    def test_log_settings_are_case_insensitive(self):
        settings = BaseCoreSettings(LOG_LEVEL="debug", LOG_FORMAT="structured")

        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.LOG_FORMAT == "json"

    @pytest.mark.unit
    @pytest.mark.config
    def test_unknown_env_is_rejected(self):
        with pytest.raises(ValidationError):
            BaseCoreSettings(ENV="qa")


class TestRateLimiterSettings:
    """Test suite for the limiter tuning settings."""

    @pytest.mark.unit
    @pytest.mark.config
    def test_defaults(self):
        settings = RateLimiterSettings()

        assert isinstance(settings, BaseCoreSettings)
        assert settings.LOCK_TIMEOUT == 3.0
        assert settings.STORE_CLEANUP_INTERVAL == 60.0
        assert settings.STORE_MAX_KEYS == 10000

    @pytest.mark.unit
    @pytest.mark.config
    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOCK_TIMEOUT", "0.5")
        monkeypatch.setenv("STORE_MAX_KEYS", "25")

        settings = RateLimiterSettings()

        assert settings.LOCK_TIMEOUT == 0.5
        assert settings.STORE_MAX_KEYS == 25

    @pytest.mark.unit
    @pytest.mark.config
    @pytest.mark.parametrize("field", ["LOCK_TIMEOUT", "STORE_CLEANUP_INTERVAL", "STORE_MAX_KEYS"])
    def test_non_positive_values_are_rejected(self, field):
        with pytest.raises(ValidationError):
            RateLimiterSettings(**{field: 0})

    @pytest.mark.unit
    @pytest.mark.config
    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
