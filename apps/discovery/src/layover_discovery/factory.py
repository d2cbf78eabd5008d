"""Production wiring of the discovery service from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from layover_core.observability import LoggingErrorSink
from layover_discovery.cache import LocalTTLCache, ResultCache
from layover_discovery.config import settings
from layover_discovery.enrichment import (
    CachedAirportProfiles,
    CuratedAirportProfiles,
    CuratedExperienceCatalog,
    OpenWeatherClient,
    TransitCalculator,
    ViatorExperienceProvider,
    VisaPolicy,
)
from layover_discovery.services.discovery import LayoverDiscoveryService
from layover_discovery.services.enrichment import LayoverEnricher
from layover_ml.market import MarketEstimator
from layover_ml.scoring import LayoverScorer, ScoringWeights
from layover_providers.aggregator import ProviderAggregator
from layover_providers.registry import build_providers

if TYPE_CHECKING:
    from layover_core.observability import ErrorSink
    from layover_discovery.config import DiscoverySettings

logger = logging.getLogger(__name__)


def build_cache(config: DiscoverySettings = settings) -> ResultCache:
    local = LocalTTLCache(config.local_cache_max_entries)
    if not config.redis_enabled:
        return ResultCache(prefix=config.cache_key_prefix, local=local)
    return ResultCache.from_url(
        config.redis_url, prefix=config.cache_key_prefix, local=local
    )


def build_discovery_service(
    config: DiscoverySettings = settings,
    *,
    error_sink: ErrorSink | None = None,
) -> LayoverDiscoveryService:
    """Construct every collaborator explicitly and inject it."""
    sink = error_sink or LoggingErrorSink()
    cache = build_cache(config)

    if config.viator_api_key:
        experiences = ViatorExperienceProvider(max_results=config.max_activities)
    else:
        logger.info("No Viator API key, using the curated activity catalog")
        experiences = CuratedExperienceCatalog(max_results=config.max_activities)

    enricher = LayoverEnricher(
        weather=OpenWeatherClient(),
        transit=TransitCalculator(),
        experiences=experiences,
        profiles=CachedAirportProfiles(
            CuratedAirportProfiles(), cache, ttl=config.airport_profile_cache_ttl
        ),
        visa=VisaPolicy(
            visa_free=config.visa_free_countries,
            evisa=config.evisa_countries,
            visa_required=config.visa_required_countries,
        ),
        timeout=config.enrichment_timeout,
        error_sink=sink,
    )
    aggregator = ProviderAggregator(
        build_providers(config.providers),
        timeout=config.provider_timeout,
        dedup_policy=config.dedup_policy,
        error_sink=sink,
    )
    weights = ScoringWeights.from_profile(config.scoring_profile, config.scoring_weights)

    return LayoverDiscoveryService(
        aggregator=aggregator,
        enricher=enricher,
        scorer=LayoverScorer(weights),
        estimator=MarketEstimator(),
        cache=cache,
        error_sink=sink,
        search_ttl=config.search_cache_ttl,
        market_ttl=config.market_cache_ttl,
        max_offers=config.max_offers_returned,
    )
