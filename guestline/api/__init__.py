"""
GuestLine operation groups and client facade
"""

from .client import GuestLineApiClient
from .reservation import (
    GuestLineReservationRequest,
    GuestLineReservationSet,
    ReservationCustomer,
    ReservationGuestGrouping,
    ReservationOperations,
    ReservationRate,
    ReservationRef,
    ReservationRefSet,
    ReservationRequest,
    ReservationRoom,
)
from .service import (
    ARI_RANGE_MAX_DAYS,
    AriAction,
    ContactRef,
    GuestLineAriRequest,
    GuestLinePropertyRequest,
    PropertyRef,
    ServiceOperations,
)

__all__ = [
    "GuestLineApiClient",
    "GuestLineReservationRequest",
    "GuestLineReservationSet",
    "ReservationCustomer",
    "ReservationGuestGrouping",
    "ReservationOperations",
    "ReservationRate",
    "ReservationRef",
    "ReservationRefSet",
    "ReservationRequest",
    "ReservationRoom",
    "ARI_RANGE_MAX_DAYS",
    "AriAction",
    "ContactRef",
    "GuestLineAriRequest",
    "GuestLinePropertyRequest",
    "PropertyRef",
    "ServiceOperations",
]
