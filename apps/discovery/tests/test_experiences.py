"""Tests for activity matching, the curated catalog and the Viator client."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import httpx
import pytest

from layover_core.schemas import Activity, ActivityType
from layover_discovery.enrichment.experiences import (
    CuratedExperienceCatalog,
    ViatorExperienceProvider,
    infer_activity_type,
    match_activities,
    parse_viator_products,
)

ARRIVAL = datetime(2030, 3, 10, 16, 0, tzinfo=UTC)


@pytest.fixture
def catalog() -> CuratedExperienceCatalog:
    return CuratedExperienceCatalog(max_results=6)


class TestCuratedCatalog:
    async def test_storm_puts_indoor_first(self, catalog, storm_weather):
        found = await catalog.search("Doha", 600, "DOH", ARRIVAL, storm_weather)

        assert [a.id for a in found] == [
            "curated_lounge",
            "curated_spa",
            "curated_duty-free",
            "curated_rest-area",
            "curated_museum-islamic-art",
            "curated_national-museum",
        ]
        assert all(a.activity_type is ActivityType.INDOOR for a in found)
        assert found[4].weather_score == 0.7
        assert "Perfect choice for current weather" == found[0].weather_recommendation

    async def test_clear_weather_ranks_by_rating(self, catalog, clear_weather):
        found = await catalog.search("Doha", 600, "DOH", ARRIVAL, clear_weather)

        assert found[0].name == "Museum of Islamic Art"
        corniche = next(a for a in found if a.id == "curated_corniche")
        assert corniche.weather_score == 1.0
        assert corniche.weather_recommendation == "Great weather for this activity!"

    def test_short_layover_keeps_airside_only(self, catalog):
        found = catalog.candidates("Doha", 120)
        assert {a.id for a in found} == {
            "curated_rest-area",
            "curated_spa",
            "curated_duty-free",
        }
        assert not any(a.requires_transit for a in found)

    def test_unknown_city_gets_airport_activities(self, catalog):
        assert len(catalog.candidates("Reykjavik", 600)) == 4


class TestMatchActivities:
    def test_poor_matches_dropped_unless_nothing_left(self, storm_weather):
        hike = Activity(
            id="hike",
            name="Desert Hike",
            activity_type=ActivityType.OUTDOOR,
            requires_transit=True,
        )
        museum = Activity(id="museum", name="Museum", activity_type=ActivityType.INDOOR)

        assert [a.id for a in match_activities([hike, museum], storm_weather)] == ["museum"]
        (only,) = match_activities([hike], storm_weather)
        assert only.weather_score == pytest.approx(0.105)
        assert "Heavy rain may delay transit" in only.warnings

    def test_mixed_activity_in_rain(self, storm_weather):
        walk = Activity(id="souq", name="Souq Walk", activity_type=ActivityType.MIXED)
        (matched,) = match_activities([walk], storm_weather)
        assert matched.weather_score == pytest.approx(0.48)

    @pytest.mark.parametrize(
        ("title", "categories", "expected"),
        [
            ("Louvre Museum Tour", [], ActivityType.INDOOR),
            ("Sunset Camel Ride", ["Desert"], ActivityType.OUTDOOR),
            ("City Highlights", ["Sightseeing"], ActivityType.MIXED),
        ],
    )
    def test_infer_activity_type(self, title, categories, expected):
        assert infer_activity_type(title, categories) is expected


@pytest.fixture
def viator_products() -> list[dict]:
    return [
        {
            "productCode": "5678P1",
            "title": "Doha City Tour with Souq Waqif",
            "categories": [{"name": "Cultural Tours"}],
            "duration": {"fixedDurationInMinutes": 240},
            "pricing": {"summary": {"fromPrice": 65.0}, "currency": "USD"},
            "reviews": {"combinedAverageRating": 4.7},
            "productUrl": "https://www.viator.com/tours/Doha/5678P1",
        },
        {"productCode": "broken"},
    ]


class TestViator:
    def test_parse_products(self, viator_products):
        (activity,) = parse_viator_products(viator_products, "Doha")

        assert activity.id == "viator_5678P1"
        assert activity.activity_type is ActivityType.INDOOR
        assert activity.duration_minutes == 240
        assert activity.price == 65.0
        assert activity.requires_transit

    async def test_search(self, viator_products, clear_weather):
        seen: list[httpx.Request] = []
        full_day = {
            "productCode": "9001D",
            "title": "Full-Day Desert Safari",
            "duration": {"fixedDurationInMinutes": 480},
            "reviews": {"combinedAverageRating": 4.9},
        }

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"products": [*viator_products, full_day]})

        provider = ViatorExperienceProvider(
            api_key="vk", transport=httpx.MockTransport(handler), max_results=3
        )
        found = await provider.search("Doha", 600, "DOH", ARRIVAL, clear_weather)
        await provider.close()

        # 600 minutes leave 420 in town; the 480-minute safari does not fit.
        assert [a.id for a in found] == ["viator_5678P1"]
        assert seen[0].headers["exp-api-key"] == "vk"
        body = json.loads(seen[0].content)
        assert body["filtering"] == {"destination": "684"}
        assert body["currency"] == "USD"

    async def test_unmapped_city_skips_request(self, clear_weather):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"products": []})

        provider = ViatorExperienceProvider(api_key="vk", transport=httpx.MockTransport(handler))
        found = await provider.search("Panama City", 600, "PTY", ARRIVAL, clear_weather)
        await provider.close()

        assert found == []
        assert seen == []

    async def test_http_error_propagates(self, clear_weather):
        provider = ViatorExperienceProvider(
            api_key="vk", transport=httpx.MockTransport(lambda _: httpx.Response(500))
        )
        with pytest.raises(httpx.HTTPStatusError):
            await provider.search("Doha", 600, "DOH", ARRIVAL, clear_weather)
        await provider.close()
