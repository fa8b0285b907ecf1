"""
GuestLine wire value codecs
Converters for the values the GuestLine JSON dialect encodes unusually
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Annotated, Any, Dict, Optional

from pydantic import BeforeValidator, PlainSerializer, ValidationInfo


DATE_ONLY_FORMAT = "%Y-%m-%d"
DATE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Encodes as JSON null; stands in for "not set" on non-nullable timestamps
DATETIME_UNSET = datetime.min

_CENTS = Decimal("100")
_MONEY_PLACES = Decimal("0.01")

_DATE_ONLY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATE_TIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")
_OCCUPANCY_KEY_PATTERN = re.compile(r"^person(\d+)$", re.IGNORECASE)


def _parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse a JSON string or number into a finite Decimal, or None"""
    # bool is an int subclass but never a wire number
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


def _cents_to_money(cents: Decimal) -> Decimal:
    whole = cents.to_integral_value(rounding=ROUND_FLOOR)
    return (whole / _CENTS).quantize(_MONEY_PLACES)


# Money (whole minor units on the wire)
def decode_money_cents(value: Any) -> Optional[Decimal]:
    """
    Decode a money amount sent as whole minor units.

    The wire value may be a JSON string ("4900") or number (4900). Any
    fractional part is floored away before dividing by 100, so "4900.75"
    decodes to 49.00. Anything that cannot be read as a number decodes to
    None rather than failing: callers treat None as "value unknown".

    A Decimal instance is taken to be an already decoded amount.
    """
    if isinstance(value, Decimal):
        return value
    parsed = _parse_decimal(value)
    if parsed is None:
        return None
    try:
        return _cents_to_money(parsed)
    except InvalidOperation:
        return None


def encode_money_cents(value: Optional[Decimal]) -> Any:
    """Money amounts are read-only on the wire"""
    raise NotImplementedError("Writing GuestLine money amounts is not supported.")


# Y/N booleans
def decode_yes_no(value: Any) -> bool:
    """True only for a case-insensitive "Y" string; JSON true/false decode to False"""
    return isinstance(value, str) and value.upper() == "Y"


def _validate_yes_no(value: Any, info: ValidationInfo) -> bool:
    # Python callers may build models from real booleans
    if info.mode == "python" and isinstance(value, bool):
        return value
    return decode_yes_no(value)


def encode_yes_no(value: bool) -> str:
    return "Y" if value else "N"


# Date-only strings
def decode_date_only(value: Any) -> Optional[date]:
    """Decode an exact yyyy-MM-dd string; anything else is None"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_ONLY_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, DATE_ONLY_FORMAT).date()
    except ValueError:
        return None


def encode_date_only(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(DATE_ONLY_FORMAT)


# Reservation timestamps
def decode_date_time(value: Any) -> datetime:
    """Decode an exact yyyy-MM-ddTHH:mm:ss string, DATETIME_UNSET otherwise"""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not _DATE_TIME_PATTERN.match(value):
        return DATETIME_UNSET
    try:
        return datetime.strptime(value, DATE_TIME_FORMAT)
    except ValueError:
        return DATETIME_UNSET


def encode_date_time(value: datetime) -> Optional[str]:
    if value == DATETIME_UNSET:
        return None
    return value.strftime(DATE_TIME_FORMAT)


# Occupancy based pricing
def _decode_occupancy_price(name: str, value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    parsed = _parse_decimal(value)
    if parsed is None:
        raise ValueError(f"Invalid value for key '{name}' in occupancy pricing map.")
    try:
        return _cents_to_money(parsed)
    except InvalidOperation:
        raise ValueError(f"Invalid value for key '{name}' in occupancy pricing map.") from None


def decode_occupancy_map(value: Any) -> Optional[Dict[int, Optional[Decimal]]]:
    """
    Decode a sparse "person<N>" pricing object into {N: amount}.

    JSON null decodes to None (no map at all), which is different from an
    empty map. Property names that do not look like "person<digits>" are
    skipped. Unlike decode_money_cents, a value that is not a number fails
    loudly with ValueError.

    Integer keys are accepted as already decoded entries.
    """
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("Occupancy pricing must be a JSON object.")

    pricing: Dict[int, Optional[Decimal]] = {}
    for name, raw in value.items():
        if isinstance(name, int) and not isinstance(name, bool):
            pricing[name] = _decode_occupancy_price(f"person{name}", raw)
            continue
        match = _OCCUPANCY_KEY_PATTERN.match(str(name))
        if not match:
            continue
        pricing[int(match.group(1))] = _decode_occupancy_price(name, raw)
    return pricing


def encode_occupancy_map(
    value: Optional[Dict[int, Optional[Decimal]]]
) -> Optional[Dict[str, Optional[int]]]:
    """Encode {N: amount} as {"person<N>": minor units}, keeping empty slots as null"""
    if value is None:
        return None
    encoded: Dict[str, Optional[int]] = {}
    for occupants, amount in value.items():
        encoded[f"person{occupants}"] = (
            None if amount is None else int((amount * _CENTS).to_integral_value(rounding=ROUND_FLOOR))
        )
    return encoded


def _decimal_to_number(value: Decimal) -> Any:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# Field types
MoneyCents = Annotated[
    Optional[Decimal],
    BeforeValidator(decode_money_cents),
    PlainSerializer(encode_money_cents, when_used="json"),
]

YesNo = Annotated[
    bool,
    BeforeValidator(_validate_yes_no),
    PlainSerializer(encode_yes_no, return_type=str, when_used="json"),
]

DateOnly = Annotated[
    Optional[date],
    BeforeValidator(decode_date_only),
    PlainSerializer(encode_date_only, return_type=Optional[str], when_used="json"),
]

WireDateTime = Annotated[
    datetime,
    BeforeValidator(decode_date_time),
    PlainSerializer(encode_date_time, return_type=Optional[str], when_used="json"),
]

OccupancyPricing = Annotated[
    Optional[Dict[int, Optional[Decimal]]],
    BeforeValidator(decode_occupancy_map),
    PlainSerializer(encode_occupancy_map, when_used="json"),
]

# Request-side amounts go out as JSON numbers, not pydantic's decimal strings
WireDecimal = Annotated[
    Decimal,
    PlainSerializer(_decimal_to_number, when_used="json"),
]
