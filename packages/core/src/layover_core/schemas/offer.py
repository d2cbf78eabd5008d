"""Normalized offer DTOs produced by every provider adapter."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import DataSource, Direction


class Endpoint(BaseModel):
    """One end of a flown leg, in local time."""

    model_config = ConfigDict(frozen=True)

    airport: str = Field(description="IATA airport code")
    city: str = ""
    country: str = ""
    time: datetime
    timezone: str = "UTC"


class Airline(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str = ""


class Segment(BaseModel):
    """A single flown leg."""

    model_config = ConfigDict(frozen=True)

    departure: Endpoint
    arrival: Endpoint
    carrier: Airline
    flight_number: str
    aircraft: str | None = None
    duration_minutes: int = Field(default=0, ge=0)


class Price(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: float = Field(ge=0)
    base: float = Field(default=0.0, ge=0)
    taxes: float = Field(default=0.0, ge=0)
    currency: str = "USD"


class Layover(BaseModel):
    """Gap between two consecutive segments at a shared airport."""

    model_config = ConfigDict(frozen=True)

    airport: str
    city: str
    country: str
    duration_minutes: int
    arrival_time: datetime
    departure_time: datetime
    direction: Direction = Direction.OUTBOUND


def _layovers_between(
    segments: tuple[Segment, ...], direction: Direction
) -> list[Layover]:
    layovers: list[Layover] = []
    for prev, nxt in zip(segments, segments[1:], strict=False):
        gap = nxt.departure.time - prev.arrival.time
        layovers.append(
            Layover(
                airport=prev.arrival.airport,
                city=prev.arrival.city,
                country=prev.arrival.country,
                duration_minutes=int(gap.total_seconds() // 60),
                arrival_time=prev.arrival.time,
                departure_time=nxt.departure.time,
                direction=direction,
            )
        )
    return layovers


def _elapsed_minutes(segments: tuple[Segment, ...]) -> int:
    if not segments:
        return 0
    delta = segments[-1].arrival.time - segments[0].departure.time
    return max(int(delta.total_seconds() // 60), 0)


class Offer(BaseModel):
    """One priced itinerary from one provider."""

    model_config = ConfigDict(frozen=True)

    id: str
    source: DataSource
    price: Price
    outbound: tuple[Segment, ...] = Field(min_length=1)
    inbound: tuple[Segment, ...] | None = None
    airline: Airline

    @computed_field  # type: ignore[prop-decorator]
    @property
    def layovers(self) -> list[Layover]:
        """Connections in travel order, outbound first."""
        found = _layovers_between(self.outbound, Direction.OUTBOUND)
        if self.inbound:
            found.extend(_layovers_between(self.inbound, Direction.INBOUND))
        return found

    @computed_field  # type: ignore[prop-decorator]
    @property
    def outbound_duration_minutes(self) -> int:
        return _elapsed_minutes(self.outbound)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def inbound_duration_minutes(self) -> int | None:
        if not self.inbound:
            return None
        return _elapsed_minutes(self.inbound)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def dedup_key(self) -> str:
        """Key for deduplicating the same itinerary seen by several providers.

        Route endpoints, first local departure truncated to the minute and
        the primary airline. Near-identical departures that differ in the
        minute are treated as different itineraries.
        """
        first = self.outbound[0]
        last = self.outbound[-1]
        dep = first.departure.time.strftime("%Y-%m-%dT%H:%M")
        return (
            f"{first.departure.airport}-{last.arrival.airport}-{dep}-{self.airline.code}"
        )

    @property
    def origin(self) -> str:
        return self.outbound[0].departure.airport

    @property
    def destination(self) -> str:
        return self.outbound[-1].arrival.airport
