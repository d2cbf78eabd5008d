"""Can the traveler leave the airport? Time breakdown over a curated transit table.

The airport table is reference data, not a live feed: durations, costs and
operating hours are typical values for each airport's main links into the
city centre.
"""

from __future__ import annotations

import logging
from datetime import datetime, time  # noqa: TC003
from typing import NamedTuple

from layover_core.schemas import TransitAnalysis, TransitMode, TransitOption

logger = logging.getLogger(__name__)

SAFETY_BUFFER_MINUTES = 30
BAGGAGE_MINUTES = 30
MIN_CITY_MINUTES = 60


class AirportTransit(NamedTuple):
    customs: int
    security: int
    walking: int
    express: bool
    options: tuple[TransitOption, ...]


class TimeBreakdown(NamedTuple):
    total: int
    buffer: int
    customs: int
    security: int
    walking: int
    transit_to_city: int
    transit_from_city: int
    baggage: int
    available_in_city: int

    @property
    def viable(self) -> bool:
        return self.available_in_city >= MIN_CITY_MINUTES


def _option(
    mode: TransitMode,
    duration: int,
    cost: float,
    frequency: int,
    hours: tuple[str, str],
    *,
    accessible: bool = True,
    direct: bool = True,
) -> TransitOption:
    return TransitOption(
        mode=mode,
        duration_minutes=duration,
        cost=cost,
        frequency_minutes=frequency,
        operating_start=time.fromisoformat(hours[0]),
        operating_end=time.fromisoformat(hours[1]),
        accessible=accessible,
        direct_route=direct,
    )


_ALL_DAY = ("00:00", "23:59")

AIRPORT_TRANSIT: dict[str, AirportTransit] = {
    "DXB": AirportTransit(30, 45, 15, True, (
        _option(TransitMode.METRO, 25, 8, 10, ("05:00", "00:00")),
        _option(TransitMode.TAXI, 20, 50, 0, _ALL_DAY),
    )),
    "DOH": AirportTransit(20, 30, 15, True, (
        _option(TransitMode.METRO, 20, 2, 6, ("06:00", "23:59")),
        _option(TransitMode.TAXI, 20, 25, 0, _ALL_DAY),
    )),
    "IST": AirportTransit(25, 40, 20, True, (
        _option(TransitMode.METRO, 50, 5, 15, ("06:00", "00:00"), direct=False),
        _option(TransitMode.BUS, 90, 3, 30, ("04:00", "01:00"), accessible=False),
        _option(TransitMode.TAXI, 45, 80, 0, _ALL_DAY),
    )),
    "AMS": AirportTransit(20, 30, 10, True, (
        _option(TransitMode.TRAIN, 15, 5.5, 10, _ALL_DAY),
        _option(TransitMode.BUS, 30, 6, 15, ("05:00", "00:30")),
    )),
    "SIN": AirportTransit(15, 25, 10, True, (
        _option(TransitMode.METRO, 30, 2.5, 7, ("05:30", "23:30")),
        _option(TransitMode.TAXI, 20, 25, 0, _ALL_DAY),
    )),
    "FRA": AirportTransit(25, 35, 15, True, (
        _option(TransitMode.TRAIN, 15, 6, 15, ("04:30", "01:00")),
        _option(TransitMode.TAXI, 25, 45, 0, _ALL_DAY),
    )),
    "LHR": AirportTransit(40, 45, 20, True, (
        _option(TransitMode.TRAIN, 20, 30, 15, ("05:10", "23:40")),
        _option(TransitMode.METRO, 55, 6, 5, ("05:00", "23:45")),
        _option(TransitMode.TAXI, 60, 110, 0, _ALL_DAY),
    )),
    "CDG": AirportTransit(30, 40, 20, False, (
        _option(TransitMode.TRAIN, 35, 11, 10, ("04:50", "23:50"), direct=False),
        _option(TransitMode.TAXI, 45, 60, 0, _ALL_DAY),
    )),
    "HKG": AirportTransit(20, 30, 15, True, (
        _option(TransitMode.TRAIN, 24, 15, 10, ("05:50", "00:48")),
        _option(TransitMode.BUS, 50, 5, 15, _ALL_DAY),
    )),
    "ICN": AirportTransit(25, 30, 15, True, (
        _option(TransitMode.TRAIN, 45, 8, 30, ("05:20", "23:40")),
        _option(TransitMode.BUS, 70, 12, 20, ("05:00", "23:00"), accessible=False),
    )),
    "HEL": AirportTransit(15, 20, 10, True, (
        _option(TransitMode.TRAIN, 30, 4, 10, ("05:00", "01:00")),
        _option(TransitMode.TAXI, 25, 45, 0, _ALL_DAY),
    )),
    "ZRH": AirportTransit(15, 20, 10, True, (
        _option(TransitMode.TRAIN, 12, 7, 10, ("05:00", "00:30")),
        _option(TransitMode.TAXI, 20, 60, 0, _ALL_DAY),
    )),
}

DEFAULT_TRANSIT = AirportTransit(30, 45, 15, False, (
    _option(TransitMode.TAXI, 30, 50, 0, _ALL_DAY),
    _option(TransitMode.BUS, 60, 10, 30, ("06:00", "22:00"), accessible=False, direct=False),
))


def stay_in_airport() -> TransitAnalysis:
    """Analysis used when transit data cannot be determined."""
    return TransitAnalysis(
        can_leave_airport=False,
        minimum_layover_required=120,
        available_time_in_city=0,
        recommendations=["Stay at the airport - transit data unavailable"],
        warnings=["Transit information could not be determined"],
        confidence=0.0,
    )


def _is_operating(option: TransitOption, at: time) -> bool:
    start, end = option.operating_start, option.operating_end
    if start <= end:
        return start <= at <= end
    return at >= start or at <= end


class TransitCalculator:
    """Deterministic transit feasibility analysis from :data:`AIRPORT_TRANSIT`."""

    def __init__(self, table: dict[str, AirportTransit] | None = None) -> None:
        self._table = AIRPORT_TRANSIT if table is None else table

    def airport_info(self, airport: str) -> AirportTransit:
        info = self._table.get(airport.upper())
        if info is None:
            logger.debug("No transit data for %s, using default table", airport)
            return DEFAULT_TRANSIT
        return info

    def breakdown(
        self, info: AirportTransit, duration_minutes: int, has_checked_baggage: bool
    ) -> TimeBreakdown:
        fastest = min(opt.duration_minutes for opt in info.options)
        baggage = BAGGAGE_MINUTES if has_checked_baggage else 0
        needed = (
            SAFETY_BUFFER_MINUTES
            + info.customs
            + info.security
            + info.walking * 2
            + fastest * 2
            + baggage
        )
        return TimeBreakdown(
            total=duration_minutes,
            buffer=SAFETY_BUFFER_MINUTES,
            customs=info.customs,
            security=info.security,
            walking=info.walking * 2,
            transit_to_city=fastest,
            transit_from_city=fastest,
            baggage=baggage,
            available_in_city=duration_minutes - needed,
        )

    @staticmethod
    def minimum_layover(info: AirportTransit) -> int:
        fastest = min(opt.duration_minutes for opt in info.options)
        return (
            SAFETY_BUFFER_MINUTES
            + info.customs
            + info.security
            + info.walking * 2
            + fastest * 2
            + MIN_CITY_MINUTES
        )

    async def analyze(
        self,
        airport: str,
        duration_minutes: int,
        arrival: datetime,
        has_checked_baggage: bool = False,
    ) -> TransitAnalysis:
        info = self.airport_info(airport)
        times = self.breakdown(info, duration_minutes, has_checked_baggage)
        options = sorted(
            (
                opt
                for opt in info.options
                if _is_operating(opt, arrival.time())
                and opt.duration_minutes * 2 + MIN_CITY_MINUTES <= times.available_in_city
            ),
            key=lambda opt: opt.duration_minutes,
        )
        return TransitAnalysis(
            can_leave_airport=times.viable,
            minimum_layover_required=self.minimum_layover(info),
            available_time_in_city=max(0, times.available_in_city),
            transit_options=options,
            recommendations=self._recommendations(times, options, info),
            warnings=self._warnings(times, has_checked_baggage),
            confidence=self._confidence(info, times),
        )

    @staticmethod
    def _recommendations(
        times: TimeBreakdown, options: list[TransitOption], info: AirportTransit
    ) -> list[str]:
        recs: list[str] = []
        if not times.viable:
            if times.total >= 120:
                recs.append("Use airport lounges and amenities")
                recs.append("Explore duty-free shopping")
            recs.append("Stay in airport - insufficient time for city visit")
            return recs

        city = times.available_in_city
        if city >= 180:
            recs.append("Excellent layover duration for city exploration")
            recs.append("Enough time for major attractions")
        elif city >= 120:
            recs.append("Good time for quick city visit")
            recs.append("Perfect for a meal in the city")
        else:
            recs.append("Limited but viable for quick exploration")
            recs.append("Consider nearby attractions only")

        if any(opt.duration_minutes <= 30 for opt in options):
            recs.append("Express transit available to city center")
        if info.express:
            recs.append("Consider purchasing day pass for unlimited travel")
        return recs

    @staticmethod
    def _warnings(times: TimeBreakdown, has_checked_baggage: bool) -> list[str]:
        warnings: list[str] = []
        if 0 < times.available_in_city < MIN_CITY_MINUTES:
            warnings.append("Very tight schedule - high risk of missing connection")
        if has_checked_baggage:
            warnings.append("Checked baggage adds complexity - consider carry-on only")
        if times.buffer < SAFETY_BUFFER_MINUTES:
            warnings.append("Limited buffer time - any delays could be problematic")
        if times.customs > 45:
            warnings.append("Long immigration times expected - plan accordingly")
        return warnings

    @staticmethod
    def _confidence(info: AirportTransit, times: TimeBreakdown) -> float:
        confidence = 0.5
        if info.options:
            confidence += 0.2
        if info.express:
            confidence += 0.1
        if times.buffer >= SAFETY_BUFFER_MINUTES:
            confidence += 0.1
        if times.available_in_city >= 120 or times.available_in_city <= 0:
            confidence += 0.1
        return round(min(confidence, 1.0), 2)
