"""Tests for the result cache, cache keys and the cached airport profiles."""

from __future__ import annotations

import json
from datetime import date

import pytest

from layover_core.schemas import AirportProfile, LayoverPreferences
from layover_discovery.cache import (
    LocalTTLCache,
    ResultCache,
    airport_profile_key,
    market_key,
    search_key,
)
from layover_discovery.enrichment import CachedAirportProfiles, CuratedAirportProfiles


class TestLocalTTLCache:
    def test_get_set(self):
        cache = LocalTTLCache()
        cache.set("k", {"a": 1}, ttl=60)
        assert cache.get("k") == {"a": 1}
        assert cache.get("missing") is None

    def test_expired_entries_are_dropped(self):
        cache = LocalTTLCache()
        cache.set("k", "v", ttl=0)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_oldest_entry_is_evicted(self):
        cache = LocalTTLCache(max_entries=2)
        cache.set("a", 1, ttl=60)
        cache.set("b", 2, ttl=60)
        cache.set("c", 3, ttl=60)
        assert cache.get("a") is None
        assert (cache.get("b"), cache.get("c")) == (2, 3)


class TestResultCache:
    async def test_redis_round_trip(self, memory_redis):
        cache = ResultCache(memory_redis, prefix="test")
        await cache.set("k", {"price": 612.0}, ttl=900)

        assert json.loads(memory_redis.store["test:k"]) == {"price": 612.0}
        assert memory_redis.ttls["test:k"] == 900
        assert await cache.get("k") == {"price": 612.0}

    async def test_redis_outage_falls_back_to_local(self, failing_redis):
        cache = ResultCache(failing_redis)
        await cache.set("k", [1, 2], ttl=60)
        assert await cache.get("k") == [1, 2]

    async def test_without_redis(self):
        cache = ResultCache()
        assert await cache.get("k") is None
        await cache.set("k", "v", ttl=60)
        assert await cache.get("k") == "v"
        await cache.close()

    async def test_corrupt_entry_is_a_miss(self, memory_redis):
        memory_redis.store["layover:k"] = "{not json"
        assert await ResultCache(memory_redis).get("k") is None


class TestKeys:
    def test_search_key_covers_constraints(self, make_request):
        day = date(2030, 3, 10)
        base = make_request(departure_date=day)
        same = make_request(departure_date=day)
        narrower = make_request(
            departure_date=day,
            preferences=LayoverPreferences(min_layover_minutes=300),
        )

        assert search_key(base) == search_key(same)
        assert search_key(base) != search_key(narrower)
        assert search_key(base).startswith("discover:JFK:SIN:2030-03-10:-:")

    def test_market_and_profile_keys(self, make_request):
        request = make_request(departure_date=date(2030, 3, 10))
        assert market_key(request) == "market:JFK:SIN:2030-03-10:USD"
        assert airport_profile_key("doh") == "airport_profile:DOH"


class TestCachedAirportProfiles:
    async def test_second_lookup_is_served_from_cache(self, memory_redis):
        class CountingSource(CuratedAirportProfiles):
            calls = 0

            async def profile(self, airport: str) -> AirportProfile:
                CountingSource.calls += 1
                return await super().profile(airport)

        profiles = CachedAirportProfiles(CountingSource(), ResultCache(memory_redis), ttl=60)
        first = await profiles.profile("DOH")
        second = await profiles.profile("DOH")

        assert first == second
        assert CountingSource.calls == 1
        assert memory_redis.ttls["layover:airport_profile:DOH"] == 60

    async def test_unreadable_entry_is_refetched(self, memory_redis):
        key = "layover:airport_profile:DOH"
        memory_redis.store[key] = '{"airport": "DOH", "amenities": "nope"}'
        profiles = CachedAirportProfiles(CuratedAirportProfiles(), ResultCache(memory_redis))

        profile = await profiles.profile("DOH")

        assert profile.hotels
        assert json.loads(memory_redis.store[key])["amenities"] != "nope"

    @pytest.mark.parametrize("airport", ["DOH", "SIN"])
    async def test_curated_hubs(self, airport):
        profile = await CuratedAirportProfiles().profile(airport)
        assert profile.hotels
        assert profile.safety.level == "high"

    async def test_unknown_airport_is_a_typical_hub(self):
        profile = await CuratedAirportProfiles().profile("XYZ")
        assert profile.amenities.lounges == ["Premium Lounge"]
        assert profile.safety.score == 7.5
