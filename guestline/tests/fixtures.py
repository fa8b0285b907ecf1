"""
Shared test fixtures for GuestLine client tests
Uses pytest-httpx for mocking HTTP calls
"""

import pytest
import pytest_asyncio
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Any, List
import httpx
from pytest_httpx import HTTPXMock

from guestline.api.client import GuestLineApiClient
from guestline.api.reservation import (
    GuestLineReservationRequest,
    ReservationCustomer,
    ReservationRate,
    ReservationRequest,
    ReservationRoom,
)
from guestline.settings import GuestLineSettings

SERVICE_URL = "https://guestline.test/common-cgi/services.pl"
BOOK_URL = "https://guestline.test/common-cgi/booking.pl"
API_KEY = "test-api-key-123"


@pytest.fixture
def settings() -> GuestLineSettings:
    """Settings pointing at the mocked endpoints"""
    return GuestLineSettings(
        api_key=API_KEY,
        partner_id="PARTNER01",
        version="2",
        service_base_url=SERVICE_URL,
        book_base_url=BOOK_URL,
    )


@pytest.fixture
def capture_settings(settings: GuestLineSettings) -> GuestLineSettings:
    """Settings that keep request and response bodies on results"""
    return settings.model_copy(
        update={"capture_request_content": True, "capture_response_content": True}
    )


@pytest_asyncio.fixture
async def api_client(settings: GuestLineSettings):
    """GuestLine client over a real httpx transport (intercepted by pytest-httpx)"""
    async with GuestLineApiClient(httpx.AsyncClient(), settings) as client:
        yield client


@pytest_asyncio.fixture
async def capturing_client(capture_settings: GuestLineSettings):
    async with GuestLineApiClient(httpx.AsyncClient(), capture_settings) as client:
        yield client


@pytest.fixture
def ari_update_response() -> Dict[str, Any]:
    """Full-year ARI payload as GuestLine sends it"""
    return {
        "propertyid": "934001",
        "room_id": "10512556XPQ3",
        "rate_id": "STAAH194181",
        "currency": "INR",
        "apikey": API_KEY,
        "data": [
            {
                "cta": "N",
                "amountAfterTax": {
                    "extrachild": "600",
                    "Rate": "4900",
                    "obp": {"person2": "5405", "person3": "5700", "person1": "4900"},
                    "extraadult": "800",
                },
                "minstay": "1",
                "from_date": "2024-08-22",
                "to_date": "2024-08-22",
                "stopsell": "N",
                "amountBeforeTax": {
                    "Rate": "4900",
                    "extrachild": "600.00",
                    "extraadult": "800.00",
                    "obp": {"person2": "5400", "person3": "5700", "person1": "4900"},
                },
                "ctd": "y",
                "inventory": "9",
                "maxstay": "28",
                "minstay_through": "1",
                "maxstay_through": "3",
            },
            {
                "minstay": "2",
                "amountAfterTax": {
                    "obp": {"person1": "4900", "foo": "bar"},
                    "Rate": "not-a-number",
                },
                "cta": "Y",
                "stopsell": "Y",
                "from_date": "2024-08-24",
                "to_date": "2024-08-24",
                "inventory": "0",
            },
        ],
        "trackingId": "FA81B5AD-E050-4501-81C9-E33EAD371762",
        "version": "2",
    }


@pytest.fixture
def property_response() -> Dict[str, Any]:
    return {
        "propertyid": "934001",
        "propertyname": "Demo Hotel",
        "currency": "GBP",
        "checkintime": "15:00",
        "checkouttime": "11:00",
        "contactinfo": {
            "addressline": "1 High Street",
            "city": "Cambridge",
            "country": "GB",
            "latitude": "52.2053",
            "longitude": "0.1218",
            "zip": "CB1 1AA",
        },
        "trackingId": "PROP-TRACK-1",
    }


def make_reservation(reservation_id: str = "RES-1001") -> ReservationRequest:
    """Reservation with one room, two adults and one child"""
    return ReservationRequest(
        reservation_datetime=datetime(2026, 11, 2, 9, 30, 0),
        reservation_id=reservation_id,
        payment_required=Decimal("0"),
        payment_type="Channel Collect",
        total_amount_after_tax=Decimal("240.50"),
        total_tax=Decimal("40.08"),
        currency_code="GBP",
        status="Confirm",
        customer=ReservationCustomer(
            first_name="Jane",
            last_name="Guest",
            email="jane@example.com",
            country="GB",
        ),
        rooms=[
            ReservationRoom(
                arrival_date=date(2026, 12, 1),
                departure_date=date(2026, 12, 3),
                room_id="1299210STANDARD",
                price=[
                    ReservationRate(date=date(2026, 12, 1), rate_id="1299224125", amount_after_tax=Decimal("120.25")),
                    ReservationRate(date=date(2026, 12, 2), rate_id="1299224125", amount_after_tax=Decimal("120.25")),
                ],
                first_name="Jane",
                last_name="Guest",
                amount_after_tax=Decimal("240.50"),
                adults=2,
                children=1,
            )
        ],
        source="Booking.com",
    )


@pytest.fixture
def reservation_request() -> GuestLineReservationRequest:
    return GuestLineReservationRequest(
        property_id="12992",
        reservation_items=[make_reservation("RES-1001"), make_reservation("RES-1002")],
    )


@pytest.fixture
def reservation_batch_response() -> List[Dict[str, Any]]:
    """Batch answer: item 2 is the tracking marker, item 3 failed"""
    return [
        {"bookingId": "RES-1001", "status": "Success"},
        {"trackingId": "T1"},
        {"bookingId": "RES-1002", "status": "Fail", "error": "bad room"},
    ]


@pytest.fixture
def mock_ari_endpoint(httpx_mock: HTTPXMock, ari_update_response: Dict[str, Any]):
    """Mock the services endpoint with an ARI payload"""
    httpx_mock.add_response(
        method="POST",
        url=SERVICE_URL,
        json=ari_update_response,
        status_code=200,
        headers={"X-Ratelimit-Limit": "100", "X-Ratelimit-Remaining": "99"},
    )
    return httpx_mock


@pytest.fixture
def mock_booking_endpoint(
    httpx_mock: HTTPXMock, reservation_batch_response: List[Dict[str, Any]]
):
    """Mock the booking endpoint with a batch answer"""
    httpx_mock.add_response(
        method="POST",
        url=BOOK_URL,
        json=reservation_batch_response,
        status_code=200,
    )
    return httpx_mock
