"""
GuestLine service operations (ARI and property information)
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from pydantic import Field, ValidationInfo, field_validator

from .base import OperationsBase
from ..ari import AriUpdate
from ..contracts import GuestLineResponse
from ..primitives.codecs import DateOnly
from ..primitives.models import Result, WireModel
from ..primitives.requests import GuestLineRequestBase, is_preflight, require_value
from ..request import GuestLineService
from ..utils.logging import log_performance

# Longest span GuestLine serves for a ranged ARI request
ARI_RANGE_MAX_DAYS = 28


class AriAction(str, Enum):
    RANGE = "ARR_info"  # up to 28 days from start
    FULL_YEAR = "year_info_ARR"


# ARI
def _checks_range(info: ValidationInfo) -> bool:
    return is_preflight(info) and info.data.get("ari_action") == AriAction.RANGE


class GuestLineAriRequest(GuestLineRequestBase):
    """
    Request for ARI data of one room and rate.

    FULL_YEAR ignores `start`/`end`; RANGE requires both, starting today or
    later and spanning at most ARI_RANGE_MAX_DAYS days.
    """

    property_id: str = Field(alias="propertyid")
    room_id: str = Field(alias="room_id")
    rate_id: str = Field(alias="rate_id")
    ari_action: AriAction = Field(default=AriAction.FULL_YEAR, exclude=True)
    start: DateOnly = Field(default=None, alias="from_date")
    end: DateOnly = Field(default=None, alias="to_date")

    def get_action(self) -> str:
        return self.ari_action.value

    @field_validator("property_id")
    @classmethod
    def property_id_required(cls, v, info: ValidationInfo):
        return require_value(v, "The Property ID parameter must not be empty.", info)

    @field_validator("room_id")
    @classmethod
    def room_id_required(cls, v, info: ValidationInfo):
        return require_value(v, "The Room ID parameter must not be empty.", info)

    @field_validator("rate_id")
    @classmethod
    def rate_id_required(cls, v, info: ValidationInfo):
        return require_value(v, "The Rate ID parameter must not be empty.", info)

    @field_validator("start")
    @classmethod
    def validate_range_start(cls, v, info: ValidationInfo):
        if _checks_range(info) and (v is None or v < date.today()):
            raise ValueError("The start of the ARI range must be today or after")
        return v

    @field_validator("end")
    @classmethod
    def validate_range_end(cls, v, info: ValidationInfo):
        if not _checks_range(info):
            return v
        if v is None:
            raise ValueError("The end of the ARI range must be on or after the start of the range")

        # An invalid start has already been reported
        start = info.data.get("start")
        if start is None:
            return v

        diff = (v - start).days
        if diff < 0:
            raise ValueError("The end of the range cannot be before the start")
        if diff > ARI_RANGE_MAX_DAYS:
            raise ValueError(
                f"The range cannot extend beyond {ARI_RANGE_MAX_DAYS} days when requesting ARI data."
            )
        return v


# Property information
class GuestLinePropertyRequest(GuestLineRequestBase):
    property_id: str = Field(alias="propertyid")

    def get_action(self) -> str:
        return "property_info"

    @field_validator("property_id")
    @classmethod
    def property_id_required(cls, v, info: ValidationInfo):
        return require_value(v, "The Property ID parameter must not be empty.", info)


class ContactRef(WireModel):
    address: Optional[str] = Field(default=None, alias="addressline")
    city: Optional[str] = None
    country: Optional[str] = None
    fax: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    location: Optional[str] = None
    telephone: Optional[str] = None
    zip: Optional[str] = None


class PropertyRef(Result):
    currency_code: Optional[str] = Field(default=None, alias="currency")
    property_name: Optional[str] = Field(default=None, alias="propertyname")
    check_in_time: Optional[str] = Field(default=None, alias="checkintime")
    check_out_time: Optional[str] = Field(default=None, alias="checkouttime")
    contact_info: Optional[ContactRef] = Field(default=None, alias="contactinfo")


class ServiceOperations(OperationsBase):
    """Operations against the GuestLine services endpoint"""

    @log_performance("get_ari")
    async def get_ari(self, request: GuestLineAriRequest) -> GuestLineResponse[AriUpdate]:
        """
        Fetch ARI data for a property, room and rate.

        Raises:
            ValueError: If request is None
        """
        return await self.fetch(GuestLineService.ARI, request, AriUpdate)

    @log_performance("get_property")
    async def get_property(
        self, request: Union[GuestLinePropertyRequest, str]
    ) -> GuestLineResponse[PropertyRef]:
        """
        Fetch property details. Accepts a request or a bare property ID.

        Raises:
            ValueError: If request is None
        """
        if isinstance(request, str):
            request = GuestLinePropertyRequest(property_id=request)
        return await self.fetch(GuestLineService.ARI, request, PropertyRef)
