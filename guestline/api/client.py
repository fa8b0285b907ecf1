"""
GuestLine API client facade
"""

import httpx

from .reservation import ReservationOperations
from .service import ServiceOperations
from ..api_client import ApiClient
from ..settings import GuestLineSettings


class GuestLineApiClient(ApiClient):
    """
    Entry point for GuestLine operations.

    Usage:
        async with GuestLineApiClient(http, settings) as client:
            response = await client.service.get_ari(request)
    """

    def __init__(self, http: httpx.AsyncClient, settings: GuestLineSettings):
        super().__init__(http, settings)
        self.service = ServiceOperations(self)
        self.reservation = ReservationOperations(self)

    async def aclose(self):
        """Close the underlying HTTP client"""
        await self._http.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
