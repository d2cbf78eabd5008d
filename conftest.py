"""Shared fixtures: request/offer factories and fake collaborators."""

from __future__ import annotations

import asyncio
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from layover_core.reference.airports import city_for, country_for
from layover_core.schemas import (
    Airline,
    DataSource,
    Endpoint,
    LayoverPreferences,
    Offer,
    Price,
    SearchRequest,
    Segment,
)
from layover_providers.base import FlightProvider

if TYPE_CHECKING:
    from collections.abc import Sequence


@pytest.fixture
def future_date() -> date:
    """Return a date ~30 days from now (avoids past-date errors)."""
    return date.today() + timedelta(days=30)


@pytest.fixture
def make_request(future_date: date):
    """Factory fixture for SearchRequest instances."""

    def _make(
        origin: str = "JFK",
        destination: str = "SIN",
        departure_date: date | None = None,
        preferences: LayoverPreferences | None = None,
        **kwargs,
    ) -> SearchRequest:
        return SearchRequest(
            origin=origin,
            destination=destination,
            departure_date=departure_date or future_date,
            preferences=preferences or LayoverPreferences(),
            **kwargs,
        )

    return _make


def _endpoint(airport: str, when: datetime) -> Endpoint:
    return Endpoint(
        airport=airport,
        city=city_for(airport),
        country=country_for(airport),
        time=when,
        timezone="UTC",
    )


@pytest.fixture
def make_offer():
    """Factory fixture for offers flying ``route`` with the given layovers.

    ``layovers`` holds one connection time (minutes) per intermediate
    airport; every flown leg takes ``leg_minutes``.
    """

    def _make(
        offer_id: str = "offer-1",
        *,
        route: Sequence[str] = ("JFK", "DOH", "SIN"),
        layovers: Sequence[int] = (600,),
        price: float = 900.0,
        currency: str = "USD",
        source: DataSource = DataSource.DUFFEL,
        airline: str = "QR",
        depart: datetime | None = None,
        leg_minutes: int = 420,
    ) -> Offer:
        assert len(layovers) == len(route) - 2
        when = depart or datetime(2030, 3, 10, 9, 0, tzinfo=UTC)
        segments: list[Segment] = []
        for i, (frm, to) in enumerate(zip(route, route[1:], strict=False)):
            arrive = when + timedelta(minutes=leg_minutes)
            segments.append(
                Segment(
                    departure=_endpoint(frm, when),
                    arrival=_endpoint(to, arrive),
                    carrier=Airline(code=airline, name=airline),
                    flight_number=f"{airline}{100 + i}",
                    duration_minutes=leg_minutes,
                )
            )
            if i < len(layovers):
                when = arrive + timedelta(minutes=layovers[i])
        return Offer(
            id=offer_id,
            source=source,
            price=Price(total=price, currency=currency),
            outbound=tuple(segments),
            airline=Airline(code=airline, name=airline),
        )

    return _make


class FakeProvider(FlightProvider):
    """In-memory provider with scripted offers, failures and delays."""

    def __init__(
        self,
        source: DataSource,
        offers: Sequence[Offer] = (),
        *,
        errors: Sequence[Exception] = (),
        fail_with: Exception | None = None,
        delay: float = 0.0,
        healthy: bool = True,
    ) -> None:
        self.source = source
        self._offers = list(offers)
        self._errors = list(errors)
        self._fail_with = fail_with
        self._delay = delay
        self._healthy = healthy
        self.calls = 0
        self.closed = False

    async def search(self, request: SearchRequest) -> list[Offer]:
        self.calls += 1
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._errors:
            raise self._errors.pop(0)
        if self._fail_with is not None:
            raise self._fail_with
        return list(self._offers)

    async def health_check(self) -> bool:
        return self._healthy

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_provider():
    """Factory fixture for :class:`FakeProvider`."""
    return FakeProvider
