"""Fixtures for building enriched layovers without any collaborator."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from layover_core.schemas import (
    Activity,
    ActivityType,
    AirportAmenities,
    EnrichedLayover,
    LayoverCandidate,
    SafetyRating,
    TransitAnalysis,
    VisaRequirement,
    WeatherSnapshot,
)


@pytest.fixture
def clear_weather() -> WeatherSnapshot:
    return WeatherSnapshot(
        temperature=22,
        feels_like=22,
        condition="Clear",
        description="clear sky",
        wind_speed=4,
        visibility=10,
        is_good_for_outdoor=True,
    )


@pytest.fixture
def storm_weather() -> WeatherSnapshot:
    return WeatherSnapshot(
        temperature=14,
        feels_like=11,
        condition="Thunderstorm",
        description="thunderstorm with heavy rain",
        wind_speed=32,
        visibility=3,
        precipitation=12,
        is_good_for_outdoor=False,
    )


@pytest.fixture
def make_enriched(clear_weather):
    """Factory fixture for EnrichedLayover values."""

    def _make(
        *,
        layover_id: str = "offer-1:0",
        offer_id: str = "offer-1",
        airport: str = "DOH",
        city: str = "Doha",
        country: str = "QA",
        duration: int = 600,
        price: float = 900.0,
        weather: WeatherSnapshot | None = None,
        can_leave: bool = True,
        available: int | None = None,
        amenities: AirportAmenities | None = None,
        activities: list[Activity] | None = None,
        safety: float = 8.5,
        visa: VisaRequirement = VisaRequirement.VISA_FREE,
    ) -> EnrichedLayover:
        arrival = datetime(2030, 3, 10, 16, 0, tzinfo=UTC)
        return EnrichedLayover(
            candidate=LayoverCandidate(
                id=layover_id,
                offer_id=offer_id,
                airport=airport,
                city=city,
                country=country,
                duration_minutes=duration,
                arrival_time=arrival,
                departure_time=arrival + timedelta(minutes=duration),
                total_price=price,
            ),
            weather=weather or clear_weather,
            transit=TransitAnalysis(
                can_leave_airport=can_leave,
                minimum_layover_required=210,
                available_time_in_city=(
                    available if available is not None else max(duration - 150, 0)
                ),
                confidence=0.9,
            ),
            amenities=amenities or AirportAmenities(),
            activities=activities or [],
            safety=SafetyRating(score=safety),
            visa_requirement=visa,
        )

    return _make


@pytest.fixture
def museum() -> Activity:
    return Activity(
        id="curated_museum",
        name="Museum of Islamic Art",
        categories=["museum", "culture"],
        activity_type=ActivityType.INDOOR,
        rating=4.8,
    )
