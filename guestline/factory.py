"""
GuestLine Client Factory
Builds configured HTTP transports and API clients
"""

import logging
from typing import Dict, Optional

import httpx

from . import __version__
from .api.client import GuestLineApiClient
from .settings import GuestLineSettings, load_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
USER_AGENT = f"GuestLine-Client/{__version__}"


class GuestLineHttpClientFactory:
    """
    Factory for httpx transports.

    Named clients are created once and reused until closed; unnamed
    clients are always new.
    """

    def __init__(self):
        self._clients: Dict[str, httpx.AsyncClient] = {}

    def create_http_client(
        self, name: Optional[str] = None, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    ) -> httpx.AsyncClient:
        if name is not None:
            existing = self._clients.get(name)
            if existing is not None and not existing.is_closed:
                return existing

        client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )

        if name is not None:
            self._clients[name] = client
            logger.info(f"Created HTTP client: {name}")

        return client

    async def close_all(self):
        """Close all named HTTP clients"""
        for name, client in self._clients.items():
            try:
                await client.aclose()
                logger.info(f"Closed HTTP client: {name}")
            except Exception as e:
                logger.error(f"Error closing HTTP client {name}: {e}")

        self._clients.clear()


class GuestLineApiClientFactory:
    """Factory for GuestLine API clients"""

    def __init__(self, http_client_factory: Optional[GuestLineHttpClientFactory] = None):
        self.http_client_factory = http_client_factory or GuestLineHttpClientFactory()

    def create_api_client(
        self, settings: GuestLineSettings, name: Optional[str] = None
    ) -> GuestLineApiClient:
        if settings is None:
            raise ValueError("settings must not be None")

        http = self.http_client_factory.create_http_client(
            name, timeout_seconds=settings.http_timeout_seconds
        )
        return GuestLineApiClient(http, settings)


# Convenience functions
def get_api_client(settings: Optional[GuestLineSettings] = None) -> GuestLineApiClient:
    """
    Create an API client, loading settings from the environment when none are given

    Raises:
        ConfigurationValidationError: If the environment settings are invalid
    """
    factory = GuestLineApiClientFactory()
    return factory.create_api_client(settings or load_settings())
