"""Layover extraction and viability filtering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layover_core.reference.airports import city_for, coordinates_for, country_for
from layover_core.schemas import LayoverCandidate

if TYPE_CHECKING:
    from collections.abc import Sequence

    from layover_core.schemas import Layover, LayoverPreferences, Offer

logger = logging.getLogger(__name__)


def is_viable(layover: Layover, constraints: LayoverPreferences) -> bool:
    return (
        constraints.min_layover_minutes
        <= layover.duration_minutes
        <= constraints.max_layover_minutes
    )


def _candidate(offer: Offer, index: int, layover: Layover) -> LayoverCandidate | None:
    city = layover.city or city_for(layover.airport)
    if not city or not layover.airport:
        return None
    return LayoverCandidate(
        id=f"{offer.id}:{index}",
        offer_id=offer.id,
        airport=layover.airport,
        city=city,
        country=layover.country or country_for(layover.airport),
        duration_minutes=layover.duration_minutes,
        arrival_time=layover.arrival_time,
        departure_time=layover.departure_time,
        direction=layover.direction,
        coordinates=coordinates_for(layover.airport),
        total_price=offer.price.total,
        currency=offer.price.currency,
        airline=offer.airline.name or offer.airline.code,
    )


def extract(
    offers: Sequence[Offer],
    constraints: LayoverPreferences,
    *,
    coalesce: bool = True,
) -> list[LayoverCandidate]:
    """Viable layover candidates from every offer, in offer order.

    With ``coalesce`` on, candidates in the same city and the same
    whole-hour duration bucket collapse into the longest one (the first
    seen on ties).
    """
    viable: list[LayoverCandidate] = []
    for offer in offers:
        for index, layover in enumerate(offer.layovers):
            if not is_viable(layover, constraints):
                continue
            candidate = _candidate(offer, index, layover)
            if candidate is not None:
                viable.append(candidate)

    if not coalesce:
        return viable

    groups: dict[tuple[str, int], LayoverCandidate] = {}
    for candidate in viable:
        key = (candidate.city.lower(), candidate.duration_minutes // 60)
        kept = groups.get(key)
        if kept is None or candidate.duration_minutes > kept.duration_minutes:
            groups[key] = candidate

    result = list(groups.values())
    logger.info(
        "Extracted %d viable layovers from %d offers (%d after coalescing)",
        len(viable),
        len(offers),
        len(result),
    )
    return result
