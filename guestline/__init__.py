"""
GuestLine Channel Manager Client

Async client for the GuestLine (OTA switch) channel manager API:
- ARI and property information from the services endpoint
- reservation batches to the booking endpoint
Every operation returns a GuestLineResponse; expected failures are data, not exceptions.
"""

__version__ = "1.0.0"

from .contracts import (
    NO_STATUS,
    GuestLineError,
    UnsupportedServiceError,
    ErrorSource,
    ErrorResponse,
    RateLimiting,
    GuestLineResponse
)

from .settings import (
    GuestLineSettings,
    GuestLineEnvironment,
    ConfigurationError,
    ConfigurationValidationError,
    load_settings
)

from .request import GuestLineRequest, GuestLineService
from .api_client import ApiClient
from .ari import AriUpdate, AriUpdateData, AriUpdateDataPricing, AriUpdateRef

from .api import (
    GuestLineApiClient,
    ServiceOperations,
    ReservationOperations,
    AriAction,
    GuestLineAriRequest,
    GuestLinePropertyRequest,
    PropertyRef,
    ContactRef,
    GuestLineReservationRequest,
    ReservationRequest,
    ReservationCustomer,
    ReservationRoom,
    ReservationRate,
    ReservationRef,
    ReservationRefSet
)

from .factory import (
    GuestLineHttpClientFactory,
    GuestLineApiClientFactory,
    get_api_client
)

__all__ = [
    "__version__",
    # Contracts
    "NO_STATUS",
    "GuestLineResponse",
    "ErrorResponse",
    "ErrorSource",
    "RateLimiting",
    # Errors
    "GuestLineError",
    "UnsupportedServiceError",
    "ConfigurationError",
    "ConfigurationValidationError",
    # Settings
    "GuestLineSettings",
    "GuestLineEnvironment",
    "load_settings",
    # Core
    "GuestLineRequest",
    "GuestLineService",
    "ApiClient",
    # Client
    "GuestLineApiClient",
    "ServiceOperations",
    "ReservationOperations",
    # Requests
    "AriAction",
    "GuestLineAriRequest",
    "GuestLinePropertyRequest",
    "GuestLineReservationRequest",
    "ReservationRequest",
    "ReservationCustomer",
    "ReservationRoom",
    "ReservationRate",
    # Payloads
    "AriUpdate",
    "AriUpdateData",
    "AriUpdateDataPricing",
    "AriUpdateRef",
    "PropertyRef",
    "ContactRef",
    "ReservationRef",
    "ReservationRefSet",
    # Factory
    "GuestLineHttpClientFactory",
    "GuestLineApiClientFactory",
    "get_api_client",
]
