"""
Tests for GuestLine client settings
"""

import pytest
from pydantic import ValidationError

from guestline.contracts import GuestLineError
from guestline.settings import (
    ConfigurationError,
    ConfigurationValidationError,
    GuestLineEnvironment,
    GuestLineSettings,
    load_settings,
)


class TestSettings:
    def test_defaults(self):
        settings = load_settings(api_key="key", partner_id="12992")

        assert settings.environment == GuestLineEnvironment.TEST
        assert settings.version is None
        assert settings.capture_request_content is False
        assert settings.capture_response_content is False
        assert settings.http_timeout_seconds == 30.0

    @pytest.mark.parametrize("environment", list(GuestLineEnvironment))
    def test_default_urls_use_partner_id(self, environment):
        settings = load_settings(api_key="key", partner_id="12992", environment=environment)

        assert settings.resolve_service_base_url() == (
            "https://channelconnect.otaswitch.com/common-cgi/12992/test/services.pl"
        )
        assert settings.resolve_book_base_url() == (
            "https://cmbooking.otaswitch.com/common-cgi/test/booking_12992.pl"
        )

    def test_explicit_urls_win(self):
        settings = load_settings(
            api_key="key",
            partner_id="12992",
            service_base_url="https://example.test/services.pl",
            book_base_url="https://example.test/book.pl",
        )

        assert settings.resolve_service_base_url() == "https://example.test/services.pl"
        assert settings.resolve_book_base_url() == "https://example.test/book.pl"

    def test_explicit_urls_without_partner(self):
        settings = load_settings(
            api_key="key",
            service_base_url="https://example.test/services.pl",
            book_base_url="https://example.test/book.pl",
        )

        assert settings.partner_id is None

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("GUESTLINE_API_KEY", "env-key")
        monkeypatch.setenv("GUESTLINE_PARTNER_ID", "555")
        monkeypatch.setenv("GUESTLINE_VERSION", "2")
        monkeypatch.setenv("GUESTLINE_CAPTURE_RESPONSE_CONTENT", "true")
        monkeypatch.setenv("GUESTLINE_ENVIRONMENT", "production")

        settings = load_settings()

        assert settings.api_key == "env-key"
        assert settings.version == "2"
        assert settings.capture_response_content is True
        assert settings.environment == GuestLineEnvironment.PRODUCTION
        assert "/555/" in settings.resolve_service_base_url()

    def test_overrides_beat_environment(self, monkeypatch):
        monkeypatch.setenv("GUESTLINE_API_KEY", "env-key")

        settings = load_settings(api_key="explicit", partner_id="1")

        assert settings.api_key == "explicit"

    def test_settings_are_frozen(self):
        settings = load_settings(api_key="key", partner_id="12992")

        with pytest.raises(ValidationError):
            settings.api_key = "other"


class TestSettingsValidation:
    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_empty_api_key(self, api_key):
        with pytest.raises(ConfigurationValidationError, match="API key"):
            load_settings(api_key=api_key, partner_id="12992")

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationValidationError):
            load_settings(partner_id="12992")

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.test/x", "/relative/path"])
    def test_invalid_base_url(self, url):
        with pytest.raises(ConfigurationValidationError, match="not a valid URI"):
            load_settings(api_key="key", partner_id="12992", service_base_url=url)

    def test_unresolvable_urls(self):
        with pytest.raises(ConfigurationValidationError, match="partner ID"):
            load_settings(api_key="key", service_base_url="https://example.test/services.pl")

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationValidationError):
            load_settings(api_key="key", partner_id="12992", http_timeout_seconds=0)

    def test_error_hierarchy(self):
        assert issubclass(ConfigurationValidationError, ConfigurationError)
        assert issubclass(ConfigurationError, GuestLineError)

    def test_direct_construction_raises_pydantic_error(self):
        with pytest.raises(ValidationError):
            GuestLineSettings(api_key="", partner_id="12992")
