"""Tests for the transit feasibility calculator."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from layover_core.schemas import TransitMode
from layover_discovery.enrichment.transit import DEFAULT_TRANSIT, TransitCalculator

ARRIVAL = datetime(2030, 3, 10, 16, 0, tzinfo=UTC)


@pytest.fixture
def calculator() -> TransitCalculator:
    return TransitCalculator()


async def test_long_doha_layover(calculator):
    analysis = await calculator.analyze("DOH", 600, ARRIVAL)

    assert analysis.can_leave_airport
    assert analysis.available_time_in_city == 450
    assert analysis.minimum_layover_required == 210
    assert [opt.mode for opt in analysis.transit_options] == [
        TransitMode.METRO,
        TransitMode.TAXI,
    ]
    assert analysis.recommendations[:2] == [
        "Excellent layover duration for city exploration",
        "Enough time for major attractions",
    ]
    assert "Express transit available to city center" in analysis.recommendations
    assert analysis.warnings == []
    assert analysis.confidence == 1.0


async def test_checked_baggage_costs_time(calculator):
    analysis = await calculator.analyze("DOH", 600, ARRIVAL, has_checked_baggage=True)

    assert analysis.available_time_in_city == 420
    assert "Checked baggage adds complexity - consider carry-on only" in analysis.warnings


async def test_short_layover_stays_airside(calculator):
    analysis = await calculator.analyze("DOH", 180, ARRIVAL)

    assert not analysis.can_leave_airport
    assert analysis.available_time_in_city == 30
    assert analysis.transit_options == []
    assert analysis.recommendations == [
        "Use airport lounges and amenities",
        "Explore duty-free shopping",
        "Stay in airport - insufficient time for city visit",
    ]
    assert "Very tight schedule - high risk of missing connection" in analysis.warnings


async def test_unknown_airport_uses_default_table(calculator):
    assert calculator.airport_info("XYZ") is DEFAULT_TRANSIT

    analysis = await calculator.analyze("XYZ", 400, ARRIVAL)

    assert analysis.available_time_in_city == 400 - 195
    assert analysis.minimum_layover_required == 255
    assert [opt.mode for opt in analysis.transit_options] == [
        TransitMode.TAXI,
        TransitMode.BUS,
    ]

    late = await calculator.analyze("XYZ", 400, datetime(2030, 3, 10, 23, 0, tzinfo=UTC))
    assert [opt.mode for opt in late.transit_options] == [TransitMode.TAXI]


async def test_operating_hours_span_midnight(calculator):
    after_midnight = datetime(2030, 3, 11, 0, 30, tzinfo=UTC)
    analysis = await calculator.analyze("IST", 600, after_midnight)

    # Metro stops at midnight; the night bus runs until 01:00.
    assert [opt.mode for opt in analysis.transit_options] == [
        TransitMode.TAXI,
        TransitMode.BUS,
    ]


def test_breakdown_adds_up(calculator):
    times = calculator.breakdown(calculator.airport_info("SIN"), 300, False)
    spent = (
        times.buffer
        + times.customs
        + times.security
        + times.walking
        + times.transit_to_city
        + times.transit_from_city
        + times.baggage
    )
    assert spent + times.available_in_city == 300
    assert times.viable
