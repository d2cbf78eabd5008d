"""Fixtures for the discovery service: weather, fake collaborators, wiring."""

from __future__ import annotations

import asyncio

import pytest

from layover_core.observability import CollectingErrorSink
from layover_core.schemas import LayoverPreferences, WeatherSnapshot
from layover_discovery.cache import ResultCache
from layover_discovery.enrichment import (
    CuratedAirportProfiles,
    CuratedExperienceCatalog,
    TransitCalculator,
    VisaPolicy,
)
from layover_discovery.services import LayoverDiscoveryService, LayoverEnricher, extract
from layover_ml.market import MarketEstimator
from layover_ml.scoring import LayoverScorer
from layover_providers.aggregator import ProviderAggregator


@pytest.fixture
def clear_weather() -> WeatherSnapshot:
    return WeatherSnapshot(
        temperature=24,
        feels_like=24,
        condition="Clear",
        description="clear sky",
        wind_speed=8,
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


class StaticWeather:
    """Returns the same snapshot for every location."""

    def __init__(self, snapshot: WeatherSnapshot) -> None:
        self.snapshot = snapshot
        self.calls = 0

    async def current_conditions(self, lat: float, lng: float) -> WeatherSnapshot:
        self.calls += 1
        return self.snapshot


class BrokenCollaborator:
    """Every lookup raises, or hangs for ``delay`` seconds first."""

    def __init__(self, exc: Exception | None = None, delay: float = 0.0) -> None:
        self._exc = exc or RuntimeError("service unavailable")
        self._delay = delay

    async def _fail(self, *args, **kwargs):
        if self._delay:
            await asyncio.sleep(self._delay)
        raise self._exc

    current_conditions = _fail
    analyze = _fail
    search = _fail
    profile = _fail


class FailingRedis:
    """Stands in for a Redis server that is down."""

    async def get(self, key):
        raise ConnectionError("redis down")

    async def set(self, key, value, ex=None):
        raise ConnectionError("redis down")

    async def aclose(self):
        return None


class MemoryRedis:
    """Dict-backed stand-in for the two Redis commands the cache uses."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttls[key] = ex

    async def aclose(self):
        return None


@pytest.fixture
def memory_redis() -> MemoryRedis:
    return MemoryRedis()


@pytest.fixture
def error_sink() -> CollectingErrorSink:
    return CollectingErrorSink()


@pytest.fixture
def make_enricher(clear_weather, error_sink):
    """Factory fixture for an enricher over offline collaborators."""

    def _make(**overrides) -> LayoverEnricher:
        collaborators = {
            "weather": StaticWeather(clear_weather),
            "transit": TransitCalculator(),
            "experiences": CuratedExperienceCatalog(max_results=6),
            "profiles": CuratedAirportProfiles(),
            "visa": VisaPolicy(),
            "timeout": 0.5,
            "error_sink": error_sink,
        }
        collaborators.update(overrides)
        return LayoverEnricher(**collaborators)

    return _make


@pytest.fixture
def make_candidate(make_offer):
    """First viable layover candidate of a fixture offer."""

    def _make(*args, **kwargs):
        (candidate,) = extract([make_offer(*args, **kwargs)], LayoverPreferences())
        return candidate

    return _make


@pytest.fixture
def make_service(make_enricher, error_sink):
    """Factory fixture wiring a discovery service around fake providers."""

    def _make(providers, *, cache: ResultCache | None = None, aggregator=None, **kwargs):
        aggregator = aggregator or ProviderAggregator(
            providers,
            timeout=1.0,
            retry_attempts=1,
            retry_base_delay=0,
            error_sink=error_sink,
        )
        return LayoverDiscoveryService(
            aggregator=aggregator,
            enricher=make_enricher(),
            scorer=LayoverScorer(),
            estimator=MarketEstimator(),
            cache=cache or ResultCache(),
            error_sink=error_sink,
            **kwargs,
        )

    return _make


@pytest.fixture
def static_weather():
    return StaticWeather


@pytest.fixture
def broken():
    """Factory fixture for :class:`BrokenCollaborator`."""
    return BrokenCollaborator


@pytest.fixture
def failing_redis() -> FailingRedis:
    return FailingRedis()
