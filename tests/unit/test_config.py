"""
Tests for the configuration module.
"""

import pytest


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self):
        """Test that defaults are applied."""
        from config.settings import Settings

        settings = Settings(_env_file=None)

        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.analysis_model == "gpt-4o-mini"
        assert settings.analysis_timeout_seconds == 60.0
        assert settings.session_ttl_seconds == 86400

    def test_api_key_from_openai_env(self, monkeypatch):
        from config.settings import Settings

        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")

        assert Settings(_env_file=None).openai_api_key == "sk-openai"

    def test_api_key_from_generic_env(self, monkeypatch):
        """API_KEY is accepted as an alternative name."""
        from config.settings import Settings

        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "sk-generic")

        settings = Settings(_env_file=None)

        assert settings.openai_api_key == "sk-generic"
        assert settings.has_api_key is True

    def test_blank_api_key_is_missing(self):
        from config.settings import get_settings_for_testing

        assert get_settings_for_testing(openai_api_key="   ").has_api_key is False

    def test_is_development_property(self):
        """Test is_development property."""
        from config.settings import get_settings_for_testing

        for env in ["development", "dev", "local"]:
            assert get_settings_for_testing(environment=env).is_development is True

        assert get_settings_for_testing(environment="production").is_development is False

    def test_is_production_property(self):
        """Test is_production property."""
        from config.settings import get_settings_for_testing

        for env in ["production", "prod"]:
            assert get_settings_for_testing(environment=env).is_production is True

        assert get_settings_for_testing(environment="development").is_production is False

    def test_cors_origins_parsing(self):
        """Test that CORS origins can be parsed from comma-separated string."""
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(
            cors_origins="http://localhost:3000,http://localhost:5173",
        )

        assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]

    def test_default_language_validation(self):
        from config.settings import get_settings_for_testing

        assert get_settings_for_testing(default_language="EN").default_language == "en"
        with pytest.raises(ValueError):
            get_settings_for_testing(default_language="de")

    def test_settings_for_testing(self):
        """Test get_settings_for_testing function."""
        from config.settings import get_settings_for_testing

        settings = get_settings_for_testing(debug=False)

        assert settings.environment == "testing"
        assert settings.debug is False
        assert settings.openai_api_key == "test-key"


class TestConstants:
    """Tests for constants and built-in charts."""

    def test_measurement_limits(self):
        from config.constants import DEFAULT_MEASUREMENT_LIMITS

        assert DEFAULT_MEASUREMENT_LIMITS.HEIGHT_MIN_CM == 140
        assert DEFAULT_MEASUREMENT_LIMITS.HEIGHT_MAX_CM == 220
        assert DEFAULT_MEASUREMENT_LIMITS.WEIGHT_MIN_KG == 40
        assert DEFAULT_MEASUREMENT_LIMITS.WEIGHT_MAX_KG == 150

    def test_default_charts_are_valid(self):
        """Built-in charts load, have unique ids and homogeneous rows."""
        from charts.models import charts_from_dicts, is_homogeneous
        from config.constants import DEFAULT_CHARTS

        charts = charts_from_dicts(DEFAULT_CHARTS)

        assert [c.id for c in charts] == ["universal", "mens_jackets", "sportswear"]
        assert all(is_homogeneous(c) for c in charts)

    def test_universal_chart_has_m_row(self):
        from config.constants import DEFAULT_CHARTS

        universal = DEFAULT_CHARTS[0]["data"]

        assert {"int": "M", "ua_eu": "48", "height": "176-182"}.items() <= universal[2].items()


class TestLocales:
    """Tests for translations."""

    def test_all_languages_have_same_keys(self):
        from config.locales import TRANSLATIONS

        keys = set(TRANSLATIONS["en"])
        assert set(TRANSLATIONS["uk"]) == keys
        assert set(TRANSLATIONS["ru"]) == keys

    def test_unknown_key_is_returned(self):
        from config.locales import translate

        assert translate("en", "no_such_key") == "no_such_key"

    def test_custom_chart_keeps_its_name(self):
        from config.locales import chart_display_name

        assert chart_display_name("custom_1", "My coats", "ru") == "My coats"
        assert chart_display_name("mens_jackets", "Чоловічі куртки", "en") == "Men's jackets"

    def test_renamed_builtin_chart_keeps_new_name(self):
        from config.locales import chart_display_name

        assert chart_display_name("universal", "Outerwear 2025", "en") == "Outerwear 2025"
        assert chart_display_name("universal", "Universal chart", "uk") == "Універсальна таблиця"
