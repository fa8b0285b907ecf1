"""
ARI (availability, rates and inventory) payloads returned by GuestLine
"""

from typing import List, Optional

from pydantic import Field

from .primitives.codecs import DateOnly, MoneyCents, OccupancyPricing, YesNo
from .primitives.models import Result, WireModel


class AriUpdateDataPricing(WireModel):
    """Rate amounts for one ARI entry; all amounts arrive as minor units"""

    rate: MoneyCents = Field(default=None, alias="Rate")
    extra_adult: MoneyCents = Field(default=None, alias="extraadult")
    extra_child: MoneyCents = Field(default=None, alias="extrachild")
    occupancy_pricing: OccupancyPricing = Field(default=None, alias="obp")


class AriUpdateData(WireModel):
    amount_after_tax: Optional[AriUpdateDataPricing] = Field(default=None, alias="amountAfterTax")
    amount_before_tax: Optional[AriUpdateDataPricing] = Field(default=None, alias="amountBeforeTax")
    closed_to_arrival: YesNo = Field(default=False, alias="cta")
    closed_to_departure: YesNo = Field(default=False, alias="ctd")
    stop_sell: YesNo = Field(default=False, alias="stopsell")
    date: DateOnly = Field(default=None, alias="date")
    from_date: DateOnly = Field(default=None, alias="from_date")
    to_date: DateOnly = Field(default=None, alias="to_date")
    inventory: Optional[int] = None
    max_stay: Optional[int] = Field(default=None, alias="maxstay")
    max_stay_through: Optional[int] = Field(default=None, alias="maxstay_through")
    min_stay: Optional[int] = Field(default=None, alias="minstay")
    min_stay_through: Optional[int] = Field(default=None, alias="minstay_through")


class AriUpdateRef(Result):
    """ARI header without the per-date entries"""

    api_key: Optional[str] = Field(default=None, alias="apikey")
    currency_code: Optional[str] = Field(default=None, alias="currency")
    property_id: Optional[str] = Field(default=None, alias="propertyid")
    rate_id: Optional[str] = Field(default=None, alias="rate_id")
    room_id: Optional[str] = Field(default=None, alias="room_id")
    version: Optional[str] = None


class AriUpdate(AriUpdateRef):
    data: Optional[List[AriUpdateData]] = None
