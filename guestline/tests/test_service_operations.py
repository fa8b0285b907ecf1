"""
Tests for GuestLine service operations with HTTPX mocking
"""

import json
import pytest
from datetime import date, timedelta
from decimal import Decimal
from pytest_httpx import HTTPXMock

from guestline.api.service import AriAction, GuestLineAriRequest, GuestLinePropertyRequest
from guestline.ari import AriUpdate
from guestline.contracts import NO_STATUS, ErrorSource, RateLimiting

from .fixtures import API_KEY, SERVICE_URL


def full_year_request(**overrides) -> GuestLineAriRequest:
    values = dict(property_id="934001", room_id="10512556XPQ3", rate_id="STAAH194181")
    values.update(overrides)
    return GuestLineAriRequest(**values)


class TestGetAri:
    """ARI retrieval"""

    @pytest.mark.asyncio
    async def test_full_year_request_body(self, api_client, mock_ari_endpoint):
        await api_client.service.get_ari(full_year_request())

        sent = mock_ari_endpoint.get_requests()[0]
        assert sent.method == "POST"
        assert sent.headers["Authorization"] == f"Bearer {API_KEY}"
        assert json.loads(sent.content) == {
            "action": "year_info_ARR",
            "apikey": API_KEY,
            "version": "2",
            "propertyid": "934001",
            "room_id": "10512556XPQ3",
            "rate_id": "STAAH194181",
        }

    @pytest.mark.asyncio
    async def test_decodes_ari_payload(self, api_client, mock_ari_endpoint):
        response = await api_client.service.get_ari(full_year_request())

        assert response.is_success is True
        assert isinstance(response.data, AriUpdate)
        assert response.tracking_id == "FA81B5AD-E050-4501-81C9-E33EAD371762"
        assert response.rate_limiting == RateLimiting(limit=100, remaining=99)

        update = response.data
        assert update.property_id == "934001"
        assert update.currency_code == "INR"
        assert len(update.data) == 2

        first = update.data[0]
        assert first.from_date == date(2024, 8, 22)
        assert first.closed_to_arrival is False
        assert first.closed_to_departure is True
        assert first.inventory == 9
        assert first.max_stay == 28
        assert first.amount_after_tax.rate == Decimal("49.00")
        assert first.amount_after_tax.extra_child == Decimal("6.00")
        assert first.amount_after_tax.occupancy_pricing == {
            1: Decimal("49.00"),
            2: Decimal("54.05"),
            3: Decimal("57.00"),
        }
        assert first.amount_before_tax.extra_adult == Decimal("8.00")

        second = update.data[1]
        assert second.stop_sell is True
        assert second.amount_after_tax.rate is None
        assert second.amount_after_tax.occupancy_pricing == {1: Decimal("49.00")}
        assert second.amount_before_tax is None

    @pytest.mark.asyncio
    async def test_explicit_key_and_version_win(self, api_client, mock_ari_endpoint):
        await api_client.service.get_ari(full_year_request(api_key="per-call-key", version="3"))

        body = json.loads(mock_ari_endpoint.get_requests()[0].content)
        assert body["apikey"] == "per-call-key"
        assert body["version"] == "3"

    @pytest.mark.asyncio
    async def test_caller_request_is_not_mutated(self, api_client, mock_ari_endpoint):
        request = full_year_request()

        await api_client.service.get_ari(request)

        assert request.api_key is None
        assert request.version is None

    @pytest.mark.asyncio
    async def test_range_request_body(self, api_client, httpx_mock: HTTPXMock, ari_update_response):
        httpx_mock.add_response(method="POST", url=SERVICE_URL, json=ari_update_response)
        start = date.today() + timedelta(days=1)

        await api_client.service.get_ari(
            full_year_request(ari_action=AriAction.RANGE, start=start, end=start + timedelta(days=6))
        )

        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body["action"] == "ARR_info"
        assert body["from_date"] == start.isoformat()
        assert body["to_date"] == (start + timedelta(days=6)).isoformat()
        assert "ari_action" not in body

    @pytest.mark.asyncio
    async def test_validation_failure_makes_no_call(self, api_client, httpx_mock: HTTPXMock):
        start = date.today()
        request = full_year_request(
            room_id="", ari_action=AriAction.RANGE, start=start, end=start + timedelta(days=40)
        )

        response = await api_client.service.get_ari(request)

        assert httpx_mock.get_requests() == []
        assert response.is_success is False
        assert response.status_code == NO_STATUS
        assert response.error.source == ErrorSource.VALIDATION
        assert response.error.error == "The Room ID parameter must not be empty."
        assert response.error.details == {
            "room_id": ["The Room ID parameter must not be empty."],
            "end": ["The range cannot extend beyond 28 days when requesting ARI data."],
        }
        assert response.request_uri == SERVICE_URL

    @pytest.mark.asyncio
    async def test_range_starting_in_the_past_makes_no_call(self, api_client, httpx_mock: HTTPXMock):
        yesterday = date.today() - timedelta(days=1)

        response = await api_client.service.get_ari(
            full_year_request(ari_action=AriAction.RANGE, start=yesterday, end=yesterday + timedelta(days=3))
        )

        assert httpx_mock.get_requests() == []
        assert response.is_success is False
        assert response.error.source == ErrorSource.VALIDATION
        assert response.error.details == {"start": ["The start of the ARI range must be today or after"]}

    @pytest.mark.asyncio
    async def test_blank_api_key_is_not_replaced(self, api_client, httpx_mock: HTTPXMock):
        """Only an unset key falls back to settings"""
        response = await api_client.service.get_ari(full_year_request(api_key=""))

        assert httpx_mock.get_requests() == []
        assert response.error.error == "API key must be provided."

    @pytest.mark.asyncio
    async def test_none_request_raises(self, api_client, httpx_mock: HTTPXMock):
        with pytest.raises(ValueError):
            await api_client.service.get_ari(None)

        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_upstream_error(self, api_client, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=SERVICE_URL,
            status_code=401,
            json={"error": "Invalid API key", "trackingId": "T-401"},
        )

        response = await api_client.service.get_ari(full_year_request())

        assert response.is_success is False
        assert response.status_code == 401
        assert response.error.error == "Invalid API key"
        assert response.error.source == ErrorSource.API
        assert response.tracking_id == "T-401"


class TestGetProperty:
    @pytest.mark.asyncio
    async def test_by_property_id(self, api_client, httpx_mock: HTTPXMock, property_response):
        httpx_mock.add_response(method="POST", url=SERVICE_URL, json=property_response)

        response = await api_client.service.get_property("934001")

        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body == {
            "action": "property_info",
            "apikey": API_KEY,
            "version": "2",
            "propertyid": "934001",
        }
        assert response.is_success is True
        assert response.data.currency_code == "GBP"
        assert response.data.check_in_time == "15:00"
        assert response.data.contact_info.address == "1 High Street"
        assert response.data.contact_info.latitude == Decimal("52.2053")

    @pytest.mark.asyncio
    async def test_by_request(self, api_client, httpx_mock: HTTPXMock, property_response):
        httpx_mock.add_response(method="POST", url=SERVICE_URL, json=property_response)

        response = await api_client.service.get_property(GuestLinePropertyRequest(property_id="934001"))

        assert response.data.property_name == "Demo Hotel"

    @pytest.mark.asyncio
    async def test_blank_property_id(self, api_client, httpx_mock: HTTPXMock):
        response = await api_client.service.get_property("")

        assert httpx_mock.get_requests() == []
        assert response.error.source == ErrorSource.VALIDATION

    @pytest.mark.asyncio
    async def test_none_request_raises(self, api_client):
        with pytest.raises(ValueError):
            await api_client.service.get_property(None)
