"""Layover discovery: search, extract, enrich, score and summarize."""

from __future__ import annotations

import logging
import statistics
import time
import uuid
from collections import defaultdict
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError

from layover_core.errors import TotalFailure
from layover_core.observability import LoggingErrorSink
from layover_core.schemas import (
    DiscoveryResult,
    EnrichedLayover,
    MarketData,
    MarketInsights,
    ScoredOffer,
)
from layover_discovery.cache.cache_keys import market_key, search_key
from layover_discovery.config import settings
from layover_ml.insights import summarize

from .extraction import extract

if TYPE_CHECKING:
    from collections.abc import Sequence

    from layover_core.observability import ErrorSink
    from layover_core.schemas import AggregatedResults, SearchRequest
    from layover_discovery.cache import ResultCache
    from layover_ml.market import MarketEstimator
    from layover_ml.scoring import LayoverScorer
    from layover_providers.aggregator import ProviderAggregator, ProviderHealth

    from .enrichment import LayoverEnricher

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

DEGRADED_NOTE = "Flight availability is degraded: no provider returned results"


class LayoverDiscoveryService:
    """Entry point for one layover discovery search.

    Collaborators are injected; see ``layover_discovery.factory`` for the
    production wiring.
    """

    def __init__(
        self,
        *,
        aggregator: ProviderAggregator,
        enricher: LayoverEnricher,
        scorer: LayoverScorer,
        estimator: MarketEstimator,
        cache: ResultCache,
        error_sink: ErrorSink | None = None,
        search_ttl: int | None = None,
        market_ttl: int | None = None,
        max_offers: int | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._enricher = enricher
        self._scorer = scorer
        self._estimator = estimator
        self._cache = cache
        self._errors = error_sink or LoggingErrorSink(logger)
        self._search_ttl = settings.search_cache_ttl if search_ttl is None else search_ttl
        self._market_ttl = settings.market_cache_ttl if market_ttl is None else market_ttl
        self._max_offers = settings.max_offers_returned if max_offers is None else max_offers

    async def discover(self, request: SearchRequest) -> DiscoveryResult:
        """Run a search; always returns a well-formed result."""
        start = time.monotonic()
        search_id = uuid.uuid4().hex
        try:
            return await self._discover(request, search_id, start)
        except Exception as exc:
            failure = TotalFailure(f"{type(exc).__name__}: {exc}")
            logger.exception(
                "Discovery %s failed for %s-%s",
                search_id,
                request.origin,
                request.destination,
            )
            self._errors.record(
                failure,
                {
                    "stage": "discovery",
                    "search_id": search_id,
                    "origin": request.origin,
                    "destination": request.destination,
                },
            )
            return DiscoveryResult(
                search_id=search_id,
                search_time_ms=int((time.monotonic() - start) * 1000),
                market_data=MarketData(notes=[DEGRADED_NOTE]),
            )

    async def _discover(
        self, request: SearchRequest, search_id: str, start: float
    ) -> DiscoveryResult:
        key = search_key(request)
        cached = await self._cached(key, DiscoveryResult)
        if cached is not None:
            logger.info("Cache hit for %s", key)
            return cached.model_copy(update={"from_cache": True})

        market = await self._market_insights(request)
        aggregated = await self._aggregator.search_all(request)
        market = self._estimator.calibrate(market, aggregated.offers)

        candidates = extract(aggregated.offers, request.preferences)
        enriched = await self._enricher.enrich_all(candidates, request.preferences)
        interests = request.preferences.preferred_activities
        scored = [
            layover.model_copy(
                update={"score": self._scorer.score(layover, market, interests)}
            )
            for layover in enriched
        ]

        offers = self._rank_offers(aggregated, scored, market, request.prefer_layovers)
        offers = offers[: self._max_offers]
        insights, market_data = summarize(offers)
        notes = self._availability_notes(aggregated)
        if notes:
            market_data = market_data.model_copy(update={"notes": notes})

        result = DiscoveryResult(
            search_id=search_id,
            offers=offers,
            total_candidates=len(candidates),
            total_offers=len(aggregated.offers),
            search_time_ms=int((time.monotonic() - start) * 1000),
            provider_counts=aggregated.provider_counts,
            provider_errors=aggregated.provider_errors,
            market_insights=market,
            market_data=market_data,
            insights=insights,
        )

        if aggregated.all_failed:
            logger.warning("All providers failed for %s; result not cached", key)
        else:
            await self._cache.set(key, result.model_dump(mode="json"), self._search_ttl)

        logger.info(
            "Discovery %s: %d offers, %d layovers in %dms",
            search_id,
            len(offers),
            len(scored),
            result.search_time_ms,
        )
        return result

    async def _cached(self, key: str, model: type[M]) -> M | None:
        raw = await self._cache.get(key)
        if raw is None:
            return None
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable cache entry %s: %s", key, exc)
            return None

    async def _market_insights(self, request: SearchRequest) -> MarketInsights:
        key = market_key(request)
        cached = await self._cached(key, MarketInsights)
        if cached is not None:
            return cached
        market = self._estimator.estimate(request)
        await self._cache.set(key, market.model_dump(mode="json"), self._market_ttl)
        return market

    def _rank_offers(
        self,
        aggregated: AggregatedResults,
        layovers: Sequence[EnrichedLayover],
        market: MarketInsights,
        prefer_layovers: bool,
    ) -> list[ScoredOffer]:
        """Attach scored layovers to their offers; best mean score first."""
        by_offer: dict[str, list[EnrichedLayover]] = defaultdict(list)
        for layover in layovers:
            by_offer[layover.candidate.offer_id].append(layover)

        ranked: list[ScoredOffer] = []
        for offer in aggregated.offers:
            own = by_offer.get(offer.id, [])
            if prefer_layovers and not own:
                continue
            ranked.append(
                ScoredOffer(
                    offer=offer,
                    layovers=own,
                    layover_score=(
                        round(statistics.mean(lay.total_score for lay in own), 2)
                        if own
                        else 0.0
                    ),
                    price_score=self._scorer.price_score(offer.price.total, market),
                )
            )
        ranked.sort(key=lambda so: (-so.layover_score, so.offer.price.total, so.offer.id))
        return ranked

    @staticmethod
    def _availability_notes(aggregated: AggregatedResults) -> list[str]:
        if aggregated.all_failed:
            return [DEGRADED_NOTE]
        if aggregated.provider_errors:
            failed = ", ".join(err.provider.value for err in aggregated.provider_errors)
            return [f"Partial availability: {failed} did not respond"]
        return []

    async def health(self) -> list[ProviderHealth]:
        return await self._aggregator.health_status()

    async def close(self) -> None:
        await self._aggregator.close()
        await self._enricher.close()
        await self._cache.close()
