"""Parse Duffel offers into Offer objects."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from layover_core.errors import ProviderResponseError
from layover_core.schemas import Airline, DataSource, Offer, Price, Segment
from layover_providers.normalize import make_endpoint, parse_iso_duration

logger = logging.getLogger(__name__)


def _place(node: dict[str, Any], when: str) -> Any:
    return make_endpoint(
        node["iata_code"],
        datetime.fromisoformat(when),
        city=node.get("city_name") or node.get("name") or "",
        country=node.get("iata_country_code") or "",
        timezone=node.get("time_zone"),
    )


def _parse_segment(seg: dict[str, Any]) -> Segment:
    carrier = seg.get("marketing_carrier") or {}
    code = carrier.get("iata_code", "")
    return Segment(
        departure=_place(seg["origin"], seg["departing_at"]),
        arrival=_place(seg["destination"], seg["arriving_at"]),
        carrier=Airline(code=code, name=carrier.get("name", "")),
        flight_number=f"{code}{seg.get('marketing_carrier_flight_number', '')}",
        aircraft=(seg.get("aircraft") or {}).get("name"),
        duration_minutes=parse_iso_duration(seg.get("duration")),
    )


def _amount(value: Any) -> float:
    return float(value) if value not in (None, "") else 0.0


def _parse_offer(item: dict[str, Any]) -> Offer:
    slices = item["slices"]
    outbound = tuple(_parse_segment(s) for s in slices[0]["segments"])
    inbound = (
        tuple(_parse_segment(s) for s in slices[1]["segments"])
        if len(slices) > 1
        else None
    )
    owner = item.get("owner") or {}
    return Offer(
        id=f"duffel_{item['id']}",
        source=DataSource.DUFFEL,
        price=Price(
            total=float(item["total_amount"]),
            base=_amount(item.get("base_amount")),
            taxes=_amount(item.get("tax_amount")),
            currency=item.get("total_currency", "USD"),
        ),
        outbound=outbound,
        inbound=inbound or None,
        airline=Airline(code=owner.get("iata_code", ""), name=owner.get("name", "")),
    )


def parse_duffel_offers(data: dict[str, Any]) -> list[Offer]:
    """Convert the ``offers`` of an offer request into :class:`Offer` objects.

    Offers that cannot be normalized are skipped with a warning.
    """
    items = data.get("offers")
    if not isinstance(items, list):
        raise ProviderResponseError(DataSource.DUFFEL, "missing 'offers' array")

    offers: list[Offer] = []
    for item in items:
        try:
            offers.append(_parse_offer(item))
        except (KeyError, IndexError, TypeError, ValueError, ValidationError) as exc:
            logger.warning(
                "Skipping malformed Duffel offer %s: %s",
                item.get("id") if isinstance(item, dict) else "?",
                exc,
            )

    logger.info("Parsed %d offers from Duffel response", len(offers))
    return offers
