"""Tests for offer merging, itinerary filtering and the retry decorator."""

from __future__ import annotations

import pytest

from layover_core.schemas import DataSource, DedupPolicy
from layover_providers.base import filter_itineraries
from layover_providers.pipeline.merger import merge_offers
from layover_providers.retry import async_retry, backoff_delay


class TestMergeOffers:
    def test_empty(self):
        assert merge_offers([]) == []
        assert merge_offers([[], []]) == []

    def test_price_ties_broken_by_content(self, make_offer):
        a = make_offer("b-offer", price=500, airline="QR")
        b = make_offer("a-offer", price=500, airline="EK")

        assert [o.id for o in merge_offers([[a], [b]])] == ["a-offer", "b-offer"]
        assert [o.id for o in merge_offers([[b], [a]])] == ["a-offer", "b-offer"]

    def test_lowest_price_keeps_earliest_on_equal_price(self, make_offer):
        first = make_offer("first", source=DataSource.DUFFEL)
        second = make_offer("second", source=DataSource.KIWI_API)
        merged = merge_offers([[first], [second]], DedupPolicy.LOWEST_PRICE)
        assert [o.id for o in merged] == ["first"]

    def test_custom_key(self, make_offer):
        a = make_offer("a", airline="QR")
        b = make_offer("b", airline="EK", price=100)
        merged = merge_offers([[a, b]], key=lambda o: o.origin)
        assert [o.id for o in merged] == ["b"]


class TestFilterItineraries:
    def test_drops_direct_flights_when_layovers_preferred(self, make_offer, make_request):
        direct = make_offer("direct", route=("JFK", "SIN"), layovers=())
        connecting = make_offer("via-doh")

        kept = filter_itineraries([direct, connecting], make_request())
        assert [o.id for o in kept] == ["via-doh"]

        kept = filter_itineraries([direct, connecting], make_request(prefer_layovers=False))
        assert [o.id for o in kept] == ["direct", "via-doh"]

    def test_connection_limit(self, make_offer, make_request):
        two_stops = make_offer(
            "two", route=("JFK", "LHR", "DOH", "SIN"), layovers=(180, 240)
        )
        assert filter_itineraries([two_stops], make_request(max_connections=1)) == []
        assert filter_itineraries([two_stops], make_request(max_connections=2)) == [two_stops]


class TestRetry:
    async def test_retries_until_success(self):
        calls = []

        @async_retry(max_retries=2, base_delay=0, exceptions=(ValueError,))
        async def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise ValueError("again")
            return "ok"

        assert await flaky() == "ok"
        assert len(calls) == 3

    async def test_give_up_on_propagates_immediately(self):
        calls = []

        class Fatal(ValueError):
            pass

        @async_retry(max_retries=3, base_delay=0, exceptions=(ValueError,), give_up_on=(Fatal,))
        async def fatal():
            calls.append(1)
            raise Fatal("stop")

        with pytest.raises(Fatal):
            await fatal()
        assert len(calls) == 1

    async def test_raises_last_error_when_exhausted(self):
        @async_retry(max_retries=1, base_delay=0, exceptions=(KeyError,))
        async def missing():
            raise KeyError("x")

        with pytest.raises(KeyError):
            await missing()

    def test_backoff_is_capped(self):
        assert backoff_delay(0, 0.5, 4.0, jitter=False) == 0.5
        assert backoff_delay(3, 0.5, 4.0, jitter=False) == 4.0
        assert backoff_delay(10, 0.5, 4.0, jitter=False) == 4.0
