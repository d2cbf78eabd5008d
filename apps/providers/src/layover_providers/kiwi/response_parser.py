"""Parse a Kiwi Tequila /v2/search response into Offer objects."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timezone
from typing import Any

from pydantic import ValidationError

from layover_core.errors import ProviderResponseError
from layover_core.reference.airlines import airline_name
from layover_core.schemas import Airline, DataSource, Offer, Price, Segment
from layover_providers.normalize import make_endpoint

logger = logging.getLogger(__name__)


def _utc_time(seg: dict[str, Any], prefix: str) -> datetime:
    iso = seg.get(f"utc_{prefix}")
    if iso:
        return datetime.fromisoformat(iso.replace("Z", "+00:00"))
    epoch = seg["dTime" if prefix == "departure" else "aTime"]
    return datetime.fromtimestamp(epoch, tz=UTC)


def _segment_time(seg: dict[str, Any], prefix: str) -> datetime:
    """Local wall-clock time of a route item's departure or arrival.

    Kiwi sends ``local_*`` with a misleading ``Z`` suffix next to the real
    ``utc_*`` instant; their difference is the airport's UTC offset. Without
    ``local_*`` the UTC instant is returned (or the legacy epoch
    ``dTime``/``aTime``) and the airport table supplies the zone.
    """
    utc = _utc_time(seg, prefix)
    local_iso = seg.get(f"local_{prefix}")
    if not local_iso:
        return utc
    wall = datetime.fromisoformat(local_iso.removesuffix("Z")).replace(tzinfo=None)
    offset = wall - utc.astimezone(UTC).replace(tzinfo=None)
    return wall.replace(tzinfo=timezone(offset))


def _parse_segment(seg: dict[str, Any]) -> Segment:
    dep = _segment_time(seg, "departure")
    arr = _segment_time(seg, "arrival")
    code = seg.get("airline", "")
    return Segment(
        departure=make_endpoint(seg["flyFrom"], dep, city=seg.get("cityFrom", "")),
        arrival=make_endpoint(seg["flyTo"], arr, city=seg.get("cityTo", "")),
        carrier=Airline(code=code, name=airline_name(code)),
        flight_number=f"{code}{seg.get('flight_no', '')}",
        aircraft=seg.get("equipment"),
        duration_minutes=max(int((arr - dep).total_seconds() // 60), 0),
    )


def _parse_itinerary(item: dict[str, Any], currency: str) -> Offer:
    route: list[dict[str, Any]] = item["route"]
    outbound = tuple(_parse_segment(s) for s in route if not s.get("return"))
    inbound = tuple(_parse_segment(s) for s in route if s.get("return"))

    airlines = item.get("airlines") or [outbound[0].carrier.code if outbound else ""]
    primary = airlines[0]
    return Offer(
        id=f"kiwi_{item['id']}",
        source=DataSource.KIWI_API,
        price=Price(total=float(item["price"]), currency=currency),
        outbound=outbound,
        inbound=inbound or None,
        airline=Airline(code=primary, name=airline_name(primary)),
    )


def parse_kiwi_response(raw: dict[str, Any], currency: str = "USD") -> list[Offer]:
    """Convert Kiwi ``data[]`` itineraries into :class:`Offer` objects.

    Route items flagged ``return`` form the inbound direction. Items that
    cannot be normalized are skipped with a warning.
    """
    items = raw.get("data")
    if not isinstance(items, list):
        raise ProviderResponseError(DataSource.KIWI_API, "missing 'data' array")

    currency = raw.get("currency") or currency
    offers: list[Offer] = []
    for item in items:
        try:
            offers.append(_parse_itinerary(item, currency))
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning(
                "Skipping malformed Kiwi itinerary %s: %s",
                item.get("id") if isinstance(item, dict) else "?",
                exc,
            )

    logger.info("Parsed %d offers from Kiwi response", len(offers))
    return offers
