"""Unit tests for glossa configuration settings."""

import pytest
from pydantic import ValidationError

from glossa.configuration import I18nSettings, Settings


@pytest.mark.unit
class TestI18nSettings:
    """Test I18nSettings configuration."""

    def test_default_values(self):
        """Test I18nSettings with default values."""
        settings = I18nSettings()

        assert settings.default_locale is None
        assert settings.cache_mode == "default"
        assert settings.cache_size == 1000

    def test_from_environment(self, monkeypatch):
        """Test I18nSettings reads the environment."""
        monkeypatch.setenv("DEFAULT_LOCALE", " en_US ")
        monkeypatch.setenv("TRANSLATION_CACHE_MODE", "Automatic")
        monkeypatch.setenv("TRANSLATION_CACHE_SIZE", "500")

        settings = I18nSettings()

        assert settings.default_locale == "en_US"
        assert settings.cache_mode == "automatic"
        assert settings.cache_size == 500

    def test_blank_default_locale_is_none(self, monkeypatch):
        """Test an empty DEFAULT_LOCALE means no default."""
        monkeypatch.setenv("DEFAULT_LOCALE", "   ")

        assert I18nSettings().default_locale is None

    @pytest.mark.parametrize("size", ["0", "-3"])
    def test_rejects_non_positive_cache_size(self, monkeypatch, size):
        """Test non-positive cache sizes are rejected."""
        monkeypatch.setenv("TRANSLATION_CACHE_SIZE", size)

        with pytest.raises(ValidationError):
            I18nSettings()

    def test_rejects_unknown_cache_mode(self, monkeypatch):
        """Test unknown cache modes are rejected."""
        monkeypatch.setenv("TRANSLATION_CACHE_MODE", "huge")

        with pytest.raises(ValidationError):
            I18nSettings()


@pytest.mark.unit
class TestSettings:
    """Test the Settings aggregator."""

    def test_instantiates_subsettings(self):
        """Test Settings builds its i18n section automatically."""
        settings = Settings()

        assert isinstance(settings.i18n, I18nSettings)
        assert settings.ENVIRONMENT == "development"
        assert settings.LOG_LEVEL == "INFO"

    def test_override_subsettings(self):
        """Test an explicit i18n section is kept."""
        i18n = I18nSettings(DEFAULT_LOCALE="pl_PL")

        assert Settings(i18n=i18n).i18n.default_locale == "pl_PL"

    @pytest.mark.parametrize(
        "environment,expected",
        [("production", True), ("PRODUCTION", True), ("development", False)],
    )
    def test_is_production(self, monkeypatch, environment, expected):
        """Test is_production follows ENVIRONMENT."""
        monkeypatch.setenv("ENVIRONMENT", environment)

        assert Settings().is_production is expected
