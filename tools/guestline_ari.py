#!/usr/bin/env python3
"""
Fetch a Full Year of ARI Data from GuestLine

Reads GUESTLINE_* settings from the environment, e.g.:

    GUESTLINE_API_KEY=... GUESTLINE_PARTNER_ID=12992 \
        python tools/guestline_ari.py 934001 10512556XPQ3 STAAH194181
"""

import argparse
import asyncio
import sys

from guestline.api.service import AriAction, GuestLineAriRequest
from guestline.factory import get_api_client
from guestline.settings import ConfigurationValidationError, load_settings


def _flag(value: bool) -> str:
    return "Y" if value else "N"


async def fetch_ari(property_id: str, room_id: str, rate_id: str) -> int:
    """Fetch and print ARI data for one room and rate"""

    print("📅 Fetching GuestLine ARI data")
    print("=" * 60)

    try:
        settings = load_settings()
    except ConfigurationValidationError as e:
        print(f"❌ Invalid configuration: {e}")
        return 1

    print(f"Partner ID: {settings.partner_id}")
    print(f"Property: {property_id}  Room: {room_id}  Rate: {rate_id}")
    print()

    request = GuestLineAriRequest(
        property_id=property_id,
        room_id=room_id,
        rate_id=rate_id,
        ari_action=AriAction.FULL_YEAR,
    )

    async with get_api_client(settings) as client:
        response = await client.service.get_ari(request)

    if not response.is_success:
        print(f"❌ Request failed: {response.status_code}")
        print(f"   Error: {response.error.error}")
        print(f"   Source: {response.error.source.value}")
        print(f"   Tracking ID: {response.tracking_id}")
        return 1

    update = response.data
    entries = update.data or []
    print(f"✅ Received {len(entries)} entries (currency {update.currency_code})")
    print(f"   Tracking ID: {response.tracking_id}")
    if response.rate_limiting:
        print(f"   Rate limit: {response.rate_limiting.remaining}/{response.rate_limiting.limit}")
    print()

    print(f"{'Date':<12} {'Inv':>5} {'Rate':>10}  CTA CTD Stop")
    print("-" * 60)
    for entry in entries:
        day = entry.date or entry.from_date
        rate = entry.amount_after_tax.rate if entry.amount_after_tax else None
        print(
            f"{str(day):<12} {str(entry.inventory if entry.inventory is not None else '-'):>5} "
            f"{str(rate if rate is not None else '-'):>10}  "
            f"{_flag(entry.closed_to_arrival):>3} {_flag(entry.closed_to_departure):>3} "
            f"{_flag(entry.stop_sell):>4}"
        )

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch a year of GuestLine ARI data")
    parser.add_argument("property_id", help="GuestLine property ID")
    parser.add_argument("room_id", help="Room type ID")
    parser.add_argument("rate_id", help="Rate plan ID")
    args = parser.parse_args()

    return asyncio.run(fetch_ari(args.property_id, args.room_id, args.rate_id))


if __name__ == "__main__":
    sys.exit(main())
