"""Tests for the end-to-end discovery flow over fake providers."""

from __future__ import annotations

import pytest

from layover_core.errors import ProviderUnavailable, TotalFailure
from layover_core.schemas import DataSource, LayoverPreferences
from layover_discovery.cache import ResultCache, search_key
from layover_discovery.services import DEGRADED_NOTE


@pytest.fixture
def offers(make_offer):
    return [
        make_offer("doh", price=900),
        make_offer("dxb", route=("JFK", "DXB", "SIN"), layovers=(420,), airline="EK", price=640),
        make_offer("ord", route=("JFK", "ORD", "SIN"), layovers=(70,), airline="UA", price=500),
    ]


async def test_discover(make_service, fake_provider, offers, make_request):
    service = make_service([fake_provider(DataSource.DUFFEL, offers)])

    result = await service.discover(make_request())

    assert result.total_offers == 3
    assert result.total_candidates == 2
    assert not result.from_cache
    # The 70-minute Chicago connection yields no viable layover.
    assert {so.offer.id for so in result.offers} == {"doh", "dxb"}
    scores = [so.layover_score for so in result.offers]
    assert scores == sorted(scores, reverse=True)
    for scored in result.offers:
        (layover,) = scored.layovers
        assert layover.score is not None
        assert layover.candidate.offer_id == scored.offer.id
        assert scored.layover_score == round(layover.score.total, 2)
    assert result.provider_counts == {DataSource.DUFFEL: 3}
    assert result.market_insights.average_price == pytest.approx((900 + 640 + 500) / 3)
    assert result.insights.best_overall is not None
    assert result.market_data.notes == []


async def test_layovers_not_required(make_service, fake_provider, offers, make_request):
    service = make_service([fake_provider(DataSource.DUFFEL, offers)])

    result = await service.discover(make_request(prefer_layovers=False))

    ord_offer = next(so for so in result.offers if so.offer.id == "ord")
    assert ord_offer.layovers == []
    assert ord_offer.layover_score == 0.0
    assert result.offers[-1].offer.id == "ord"


async def test_constraints_narrow_candidates(make_service, fake_provider, offers, make_request):
    service = make_service([fake_provider(DataSource.DUFFEL, offers)])
    request = make_request(preferences=LayoverPreferences(min_layover_minutes=480))

    result = await service.discover(request)

    assert [so.offer.id for so in result.offers] == ["doh"]


async def test_identical_request_is_served_from_cache(
    make_service, fake_provider, offers, make_request
):
    provider = fake_provider(DataSource.DUFFEL, offers)
    service = make_service([provider])
    request = make_request()

    first = await service.discover(request)
    second = await service.discover(request)

    assert provider.calls == 1
    assert second.from_cache
    assert second.search_id == first.search_id
    assert second.offers == first.offers


async def test_all_providers_down(make_service, fake_provider, make_request, error_sink):
    providers = [
        fake_provider(source, fail_with=ProviderUnavailable(source.value, "HTTP 503"))
        for source in (DataSource.DUFFEL, DataSource.KIWI_API)
    ]
    service = make_service(providers)
    request = make_request()

    result = await service.discover(request)
    await service.discover(request)

    assert result.offers == []
    assert result.market_data.notes == [DEGRADED_NOTE]
    assert len(result.provider_errors) == 2
    assert len(error_sink.records) == 4
    # Degraded results are never cached.
    assert providers[0].calls == 2


async def test_partial_availability_note(make_service, fake_provider, offers, make_request):
    providers = [
        fake_provider(DataSource.DUFFEL, offers),
        fake_provider(DataSource.GDS, fail_with=ProviderUnavailable("GDS", "HTTP 502")),
    ]
    result = await make_service(providers).discover(make_request())

    assert len(result.offers) == 2
    assert result.market_data.notes == ["Partial availability: GDS did not respond"]


async def test_unexpected_error_returns_empty_result(make_service, make_request, error_sink):
    class ExplodingAggregator:
        async def search_all(self, request):
            raise RuntimeError("boom")

    service = make_service([], aggregator=ExplodingAggregator())

    result = await service.discover(make_request())

    assert result.offers == []
    assert result.market_data.notes == [DEGRADED_NOTE]
    ((error, context),) = error_sink.records
    assert isinstance(error, TotalFailure)
    assert "boom" in str(error)
    assert context["stage"] == "discovery"
    assert context["search_id"] == result.search_id


async def test_cache_outage_does_not_fail_search(
    make_service, fake_provider, offers, make_request, failing_redis
):
    provider = fake_provider(DataSource.DUFFEL, offers)
    service = make_service([provider], cache=ResultCache(failing_redis))
    request = make_request()

    first = await service.discover(request)
    second = await service.discover(request)

    assert len(first.offers) == 2
    assert second.from_cache
    assert provider.calls == 1


async def test_unreadable_cache_entry_is_ignored(
    make_service, fake_provider, offers, make_request, memory_redis
):
    request = make_request()
    memory_redis.store[f"layover:{search_key(request)}"] = '{"offers": "nope"}'
    provider = fake_provider(DataSource.DUFFEL, offers)

    result = await make_service([provider], cache=ResultCache(memory_redis)).discover(request)

    assert not result.from_cache
    assert provider.calls == 1
    assert len(result.offers) == 2


async def test_max_offers(make_service, fake_provider, offers, make_request):
    service = make_service([fake_provider(DataSource.DUFFEL, offers)], max_offers=1)
    result = await service.discover(make_request())
    assert len(result.offers) == 1
    assert result.total_offers == 3


async def test_health_and_close(make_service, fake_provider):
    provider = fake_provider(DataSource.KIWI_API, healthy=False)
    service = make_service([provider])

    (health,) = await service.health()
    await service.close()

    assert health.status == "down"
    assert provider.closed
