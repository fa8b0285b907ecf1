"""
Wire primitives for the GuestLine dialect
"""

from .codecs import (
    DATETIME_UNSET,
    DateOnly,
    MoneyCents,
    OccupancyPricing,
    WireDateTime,
    WireDecimal,
    YesNo,
    decode_date_only,
    decode_date_time,
    decode_money_cents,
    decode_occupancy_map,
    decode_yes_no,
    encode_date_only,
    encode_date_time,
    encode_money_cents,
    encode_occupancy_map,
    encode_yes_no,
)
from .models import Result, WireModel
from .requests import PREFLIGHT, GuestLineRequestBase, group_failures

__all__ = [
    "DATETIME_UNSET",
    "DateOnly",
    "MoneyCents",
    "OccupancyPricing",
    "WireDateTime",
    "WireDecimal",
    "YesNo",
    "decode_date_only",
    "decode_date_time",
    "decode_money_cents",
    "decode_occupancy_map",
    "decode_yes_no",
    "encode_date_only",
    "encode_date_time",
    "encode_money_cents",
    "encode_occupancy_map",
    "encode_yes_no",
    "Result",
    "WireModel",
    "PREFLIGHT",
    "GuestLineRequestBase",
    "group_failures",
]
