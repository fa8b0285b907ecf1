"""
Configuration for the GuestLine client
Settings are read from GUESTLINE_* environment variables or passed explicitly
"""

from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .contracts import GuestLineError


class ConfigurationError(GuestLineError):
    """Configuration-related errors"""
    pass


class ConfigurationValidationError(ConfigurationError):
    """Configuration validation errors"""
    pass


class GuestLineEnvironment(str, Enum):
    """GuestLine environments"""
    PRODUCTION = "production"
    TEST = "test"


# GuestLine publishes the same hosts for both environments
SERVICE_BASE_URLS: Dict[GuestLineEnvironment, str] = {
    GuestLineEnvironment.PRODUCTION: "https://channelconnect.otaswitch.com/common-cgi/{partner_id}/test/services.pl",
    GuestLineEnvironment.TEST: "https://channelconnect.otaswitch.com/common-cgi/{partner_id}/test/services.pl",
}

BOOK_BASE_URLS: Dict[GuestLineEnvironment, str] = {
    GuestLineEnvironment.PRODUCTION: "https://cmbooking.otaswitch.com/common-cgi/test/booking_{partner_id}.pl",
    GuestLineEnvironment.TEST: "https://cmbooking.otaswitch.com/common-cgi/test/booking_{partner_id}.pl",
}


class GuestLineSettings(BaseSettings):
    """
    GuestLine client settings.

    The API key is sent as the bearer token and is also the default `apikey`
    of every request body. Base URLs default to the environment's hosts for
    the configured partner; an explicit URL always wins.
    """

    model_config = SettingsConfigDict(
        env_prefix='GUESTLINE_',
        env_file=None,
        case_sensitive=False,
        extra='ignore',
        frozen=True,
    )

    api_key: str = Field(..., description="GuestLine API key - REQUIRED")
    environment: GuestLineEnvironment = Field(default=GuestLineEnvironment.TEST, description="GuestLine environment")
    partner_id: Optional[str] = Field(default=None, description="Partner ID used to build the default base URLs")
    version: Optional[str] = Field(default=None, description="Default API version for request bodies")

    service_base_url: Optional[str] = Field(default=None, description="Explicit services (ARI) endpoint")
    book_base_url: Optional[str] = Field(default=None, description="Explicit booking endpoint")

    capture_request_content: bool = Field(default=False, description="Keep the serialized request body on results")
    capture_response_content: bool = Field(default=False, description="Keep the raw response body on successful results")

    http_timeout_seconds: float = Field(default=30.0, gt=0, le=300, description="Transport timeout")

    @field_validator('api_key')
    @classmethod
    def validate_api_key(cls, v):
        if not v or not v.strip():
            raise ValueError('The API key must not be empty.')
        return v.strip()

    @field_validator('partner_id', 'version')
    @classmethod
    def blank_as_unset(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @field_validator('service_base_url', 'book_base_url')
    @classmethod
    def validate_urls(cls, v):
        if v is None or not v.strip():
            return None
        parsed = urlparse(v)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"'{v}' is not a valid URI.")
        return v

    @model_validator(mode='after')
    def validate_resolvable_urls(self):
        if not self.partner_id and (not self.service_base_url or not self.book_base_url):
            raise ValueError(
                'A partner ID is required unless both the service and book base URLs are configured.'
            )
        return self

    def resolve_service_base_url(self) -> str:
        if self.service_base_url:
            return self.service_base_url
        return SERVICE_BASE_URLS[self.environment].format(partner_id=self.partner_id)

    def resolve_book_base_url(self) -> str:
        if self.book_base_url:
            return self.book_base_url
        return BOOK_BASE_URLS[self.environment].format(partner_id=self.partner_id)


def load_settings(**overrides: Any) -> GuestLineSettings:
    """
    Load settings from the environment, applying keyword overrides.

    Raises:
        ConfigurationValidationError: If the settings are invalid
    """
    try:
        return GuestLineSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationValidationError(f"Configuration validation failed: {e}") from e
