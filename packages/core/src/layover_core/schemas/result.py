"""Aggregation, market and discovery result schemas."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field

from .enums import DataSource  # noqa: TC001
from .layover import EnrichedLayover  # noqa: TC001
from .offer import Offer  # noqa: TC001


class ProviderErrorInfo(BaseModel):
    """A provider that failed or timed out during one search."""

    model_config = ConfigDict(frozen=True)

    provider: DataSource
    error_type: str
    message: str


class AggregatedResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    offers: list[Offer] = Field(default_factory=list)
    provider_counts: dict[DataSource, int] = Field(default_factory=dict)
    provider_errors: list[ProviderErrorInfo] = Field(default_factory=list)
    providers_queried: int = Field(default=0, ge=0)
    search_time_ms: int = 0

    @property
    def all_failed(self) -> bool:
        # Several adapters may share a source, so count adapters, not sources.
        return bool(self.provider_errors) and len(self.provider_errors) >= self.providers_queried


class ScoredOffer(BaseModel):
    """An offer together with its enriched, scored layovers."""

    model_config = ConfigDict(frozen=True)

    offer: Offer
    layovers: list[EnrichedLayover] = Field(default_factory=list)
    layover_score: float = Field(default=0.0, ge=0, le=1)
    price_score: float = Field(default=0.0, ge=0, le=1)


class MarketInsights(BaseModel):
    """Heuristic route-level price expectations."""

    model_config = ConfigDict(frozen=True)

    average_price: float = 800.0
    price_confidence: float = Field(default=0.7, ge=0, le=1)
    cheapest_dates: list[date] = Field(default_factory=list)
    popular_routes: list[str] = Field(default_factory=list)
    seasonal_multiplier: float = 1.0
    route_multiplier: float = 1.0
    currency: str = "USD"


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = 0.0
    max: float = 0.0


class MarketData(BaseModel):
    """Descriptive statistics over one result set."""

    model_config = ConfigDict(frozen=True)

    average_layover_duration: int = 0
    popular_cities: list[str] = Field(default_factory=list)
    price_range: PriceRange = Field(default_factory=PriceRange)
    notes: list[str] = Field(default_factory=list)


class DiscoveryInsights(BaseModel):
    model_config = ConfigDict(frozen=True)

    best_overall: EnrichedLayover | None = None
    weather_friendly: list[EnrichedLayover] = Field(default_factory=list)
    quick_explore: list[EnrichedLayover] = Field(default_factory=list)
    extended_stay: list[EnrichedLayover] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class DiscoveryResult(BaseModel):
    """Top-level response of one layover discovery search."""

    model_config = ConfigDict(frozen=True)

    search_id: str
    offers: list[ScoredOffer] = Field(default_factory=list)
    total_candidates: int = 0
    total_offers: int = 0
    search_time_ms: int = 0
    provider_counts: dict[DataSource, int] = Field(default_factory=dict)
    provider_errors: list[ProviderErrorInfo] = Field(default_factory=list)
    market_insights: MarketInsights = Field(default_factory=MarketInsights)
    market_data: MarketData = Field(default_factory=MarketData)
    insights: DiscoveryInsights = Field(default_factory=DiscoveryInsights)
    from_cache: bool = False
