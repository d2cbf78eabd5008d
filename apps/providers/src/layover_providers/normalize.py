"""Helpers shared by the provider response parsers."""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from layover_core.reference.airports import get_airport
from layover_core.schemas import Endpoint

logger = logging.getLogger(__name__)

# ISO-8601 duration → minutes (e.g. "PT2H30M" → 150, "P1DT2H" → 1560)
_DURATION_RE = re.compile(r"P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?)?")


def parse_iso_duration(value: str | None) -> int:
    """Convert an ISO-8601 duration string to minutes."""
    m = _DURATION_RE.fullmatch(value or "")
    if not m:
        return 0
    days, hours, minutes = (int(g or 0) for g in m.groups())
    return days * 1440 + hours * 60 + minutes


def _zone(name: str | None) -> ZoneInfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("Unknown time zone %r", name)
        return None


def make_endpoint(
    airport: str,
    when: datetime,
    *,
    city: str = "",
    country: str = "",
    timezone: str | None = None,
) -> Endpoint:
    """Build an endpoint in the airport's local time.

    Naive times are taken as local wall-clock time; aware times are
    converted. City, country and zone fall back to the airport reference
    table when the payload omits them. With no known zone an aware time
    keeps its own offset, which then names the endpoint timezone.
    """
    ref = get_airport(airport) if airport else None
    tz_name = timezone or (ref.timezone if ref else None)
    zone = _zone(tz_name)

    if when.tzinfo is None:
        local = when.replace(tzinfo=zone or UTC)
    else:
        local = when.astimezone(zone) if zone else when

    return Endpoint(
        airport=airport.upper(),
        city=city or (ref.city if ref else ""),
        country=country or (ref.country if ref else ""),
        time=local,
        timezone=tz_name or local.tzname() or "UTC",
    )
