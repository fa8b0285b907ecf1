"""
GuestLine reservation operations
Reservations are pushed in batches to the booking endpoint
"""

import dataclasses
from datetime import datetime
from typing import List, Optional

from pydantic import Field, ValidationInfo, computed_field, field_validator

from .base import REQUEST_METHOD, OperationsBase
from ..contracts import BATCH_FAILED, ErrorResponse, ErrorSource, GuestLineResponse
from ..primitives.codecs import DateOnly, WireDateTime, WireDecimal
from ..primitives.models import Result, WireModel
from ..primitives.requests import GuestLineRequestBase, require_value
from ..request import GuestLineRequest, GuestLineService
from ..utils.logging import log_performance

# OTA age qualifying codes
ADULT_AGE_QUALIFYING_CODE = 10
CHILD_AGE_QUALIFYING_CODE = 8

CANCEL_STATUS = "Cancel"
FAIL_STATUS = "fail"


class ReservationGuestGrouping(WireModel):
    age_qualifying_code: int = Field(alias="AgeQualifyingCode")
    count: int = Field(alias="Count")


class ReservationRate(WireModel):
    """Nightly price of a room"""

    date: DateOnly = Field(alias="date")
    rate_id: str = Field(alias="rate_id")
    amount_after_tax: WireDecimal = Field(alias="amountaftertax")


class ReservationRoom(WireModel):
    arrival_date: DateOnly = Field(alias="arrival_date")
    departure_date: DateOnly = Field(alias="departure_date")
    room_id: str = Field(alias="room_id")
    price: List[ReservationRate] = Field(default_factory=list, alias="price")
    first_name: str = Field(alias="first_name")
    last_name: str = Field(alias="last_name")
    remarks: Optional[str] = None
    amount_after_tax: WireDecimal = Field(alias="amountaftertax")
    adults: int = Field(default=0, ge=0, exclude=True)
    children: int = Field(default=0, ge=0, exclude=True)

    @computed_field(alias="GuestCount")
    @property
    def guests(self) -> List[ReservationGuestGrouping]:
        """Guest counts by age qualifying code, adults first, empty groups left out"""
        groupings = []
        if self.adults > 0:
            groupings.append(
                ReservationGuestGrouping(age_qualifying_code=ADULT_AGE_QUALIFYING_CODE, count=self.adults)
            )
        if self.children > 0:
            groupings.append(
                ReservationGuestGrouping(age_qualifying_code=CHILD_AGE_QUALIFYING_CODE, count=self.children)
            )
        return groupings


class ReservationCustomer(WireModel):
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None
    salutation: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    remarks: Optional[str] = None
    telephone: Optional[str] = None
    zip: Optional[str] = None


class ReservationRequest(WireModel):
    reservation_datetime: WireDateTime = Field(alias="reservation_datetime")
    reservation_id: str = Field(alias="reservation_id")
    payment_required: WireDecimal = Field(alias="payment_required")
    payment_type: str = Field(alias="payment_type")
    total_amount_after_tax: WireDecimal = Field(alias="totalamountaftertax")
    total_tax: WireDecimal = Field(alias="totaltax")
    currency_code: str = Field(alias="currencycode")
    status: str = Field(alias="status")
    customer: ReservationCustomer = Field(alias="customer")
    rooms: List[ReservationRoom] = Field(alias="room")
    source: str = Field(alias="POS")

    def as_cancellation(self, cancelled_at: datetime) -> "ReservationRequest":
        """Copy of this reservation marked cancelled at `cancelled_at`"""
        return self.model_copy(update={"status": CANCEL_STATUS, "reservation_datetime": cancelled_at})


class GuestLineReservationSet(WireModel):
    reservations: List[ReservationRequest] = Field(alias="reservation")


class GuestLineReservationRequest(GuestLineRequestBase):
    property_id: str = Field(alias="propertyid")
    reservation_items: List[ReservationRequest] = Field(default_factory=list, exclude=True)

    @computed_field(alias="reservations")
    @property
    def reservations(self) -> GuestLineReservationSet:
        return GuestLineReservationSet(reservations=self.reservation_items)

    def get_action(self) -> str:
        return "reservation_info"

    @field_validator("property_id")
    @classmethod
    def property_id_required(cls, v, info: ValidationInfo):
        return require_value(v, "The Property ID parameter must not be empty.", info)


class ReservationRef(Result):
    booking_id: Optional[str] = Field(default=None, alias="bookingId")


class ReservationRefSet(Result):
    reservations: Optional[List[ReservationRef]] = None


class ReservationOperations(OperationsBase):
    """Operations against the GuestLine booking endpoint"""

    @log_performance("process_reservation")
    async def process_reservation(
        self, request: GuestLineReservationRequest
    ) -> GuestLineResponse[ReservationRefSet]:
        """
        Push a batch of reservations.

        GuestLine answers with one entry per reservation plus a marker entry
        carrying the batch tracking ID. The marker is dropped and its tracking
        ID copied onto every other entry. The batch fails when any entry has an
        error or a "fail" status.

        Raises:
            ValueError: If request is None
        """
        prepared, failure = self.preflight(GuestLineService.BOOK, request)
        if failure is not None:
            return failure

        response = await self._client.fetch(
            GuestLineRequest(service=GuestLineService.BOOK, method=REQUEST_METHOD, data=prepared),
            List[ReservationRef],
        )
        if not response.is_success:
            return dataclasses.replace(response, data=None)

        items: List[ReservationRef] = response.data or []
        tracker = next((item for item in items if item.tracking_id), None)
        tracking_id = tracker.tracking_id if tracker is not None else None

        refs: List[ReservationRef] = []
        errors: List[str] = []
        success = True
        for item in items:
            if item is tracker:
                continue

            if item.error or (item.status or "").lower() == FAIL_STATUS:
                success = False
                if item.error:
                    errors.append(item.error)

            refs.append(item.model_copy(update={"tracking_id": tracking_id}))

        error = None
        if not success:
            error = ErrorResponse(
                error="\n".join(errors) or BATCH_FAILED,
                status="Fail",
                tracking_id=tracking_id,
                source=ErrorSource.API,
            )
            self.logger.warning(
                "Reservation batch reported failures",
                tracking_id=tracking_id,
                failed_items=len(errors),
            )

        return dataclasses.replace(
            response,
            is_success=success,
            data=ReservationRefSet(reservations=refs, tracking_id=tracking_id),
            error=error,
        )
