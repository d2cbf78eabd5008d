"""Parse an Amadeus flight-offers response into Offer objects."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from layover_core.errors import ProviderResponseError
from layover_core.reference.airlines import airline_name
from layover_core.schemas import Airline, DataSource, Offer, Price, Segment
from layover_providers.normalize import make_endpoint, parse_iso_duration

logger = logging.getLogger(__name__)


def _carrier(code: str, carriers: dict[str, str]) -> Airline:
    name = carriers.get(code)
    return Airline(code=code, name=name.title() if name else airline_name(code))


def _parse_segment(
    seg: dict[str, Any],
    locations: dict[str, dict[str, Any]],
    carriers: dict[str, str],
) -> Segment:
    dep = seg["departure"]
    arr = seg["arrival"]
    code = seg.get("carrierCode", "")
    return Segment(
        departure=make_endpoint(
            dep["iataCode"],
            datetime.fromisoformat(dep["at"]),
            country=locations.get(dep["iataCode"], {}).get("countryCode", ""),
        ),
        arrival=make_endpoint(
            arr["iataCode"],
            datetime.fromisoformat(arr["at"]),
            country=locations.get(arr["iataCode"], {}).get("countryCode", ""),
        ),
        carrier=_carrier(code, carriers),
        flight_number=f"{code}{seg.get('number', '')}",
        aircraft=(seg.get("aircraft") or {}).get("code"),
        duration_minutes=parse_iso_duration(seg.get("duration")),
    )


def _parse_offer(
    item: dict[str, Any],
    locations: dict[str, dict[str, Any]],
    carriers: dict[str, str],
) -> Offer:
    itineraries = item["itineraries"]
    legs = [
        tuple(_parse_segment(s, locations, carriers) for s in itin["segments"])
        for itin in itineraries
    ]
    price = item["price"]
    total = price.get("grandTotal") or price["total"]
    validating = item.get("validatingAirlineCodes") or [legs[0][0].carrier.code]
    base = float(price.get("base") or 0)
    return Offer(
        id=f"amadeus_{item['id']}",
        source=DataSource.GDS,
        price=Price(
            total=float(total),
            base=base,
            taxes=max(float(total) - base, 0.0) if base else 0.0,
            currency=price.get("currency", "USD"),
        ),
        outbound=legs[0],
        inbound=legs[1] if len(legs) > 1 else None,
        airline=_carrier(validating[0], carriers),
    )


def parse_flight_offers(body: dict[str, Any]) -> list[Offer]:
    """Convert an Amadeus Flight Offers Search body into :class:`Offer` objects.

    The first itinerary is outbound and the second, when present, inbound.
    Offers that cannot be normalized are skipped with a warning.
    """
    items = body.get("data")
    if not isinstance(items, list):
        raise ProviderResponseError(DataSource.GDS, "missing 'data' array")

    dictionaries = body.get("dictionaries") or {}
    locations = dictionaries.get("locations") or {}
    carriers = dictionaries.get("carriers") or {}

    offers: list[Offer] = []
    for item in items:
        try:
            offers.append(_parse_offer(item, locations, carriers))
        except (KeyError, IndexError, TypeError, ValueError, ValidationError) as exc:
            logger.warning(
                "Skipping malformed Amadeus offer %s: %s",
                item.get("id") if isinstance(item, dict) else "?",
                exc,
            )

    logger.info("Parsed %d flight offers from Amadeus GDS", len(offers))
    return offers
