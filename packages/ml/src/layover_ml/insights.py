"""Descriptive insights and market statistics over one scored result set."""

from __future__ import annotations

import statistics
from collections import Counter
from typing import TYPE_CHECKING

from layover_core.schemas import (
    DiscoveryInsights,
    EnrichedLayover,
    MarketData,
    PriceRange,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from layover_core.schemas import ScoredOffer

BUCKET_SIZE = 3
TOP_CITIES = 5
WEATHER_FRIENDLY_SCORE = 0.7
QUICK_EXPLORE_MINUTES = (120, 300)


def _rank_key(layover: EnrichedLayover) -> tuple[float, int, str]:
    return (-layover.total_score, -layover.candidate.duration_minutes, layover.candidate.id)


def _weather_score(layover: EnrichedLayover) -> float:
    if layover.score is None:
        return 0.0
    return layover.score.breakdown.get("weather", 0.0)


def _format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"


def summarize(
    scored_offers: Sequence[ScoredOffer],
) -> tuple[DiscoveryInsights, MarketData]:
    """Bucket the scored layovers and compute market aggregates. No I/O."""
    layovers = sorted(
        (lay for so in scored_offers for lay in so.layovers), key=_rank_key
    )

    weather_friendly = [
        lay for lay in layovers if _weather_score(lay) >= WEATHER_FRIENDLY_SCORE
    ]
    low, high = QUICK_EXPLORE_MINUTES
    quick = [
        lay for lay in layovers if low <= lay.candidate.duration_minutes <= high
    ]
    extended = [lay for lay in layovers if lay.candidate.duration_minutes > high]

    best = layovers[0] if layovers else None
    recommendations: list[str] = []
    if best is not None:
        recommendations.append(
            f"Best layover: {best.candidate.city} "
            f"({_format_duration(best.candidate.duration_minutes)}, "
            f"score {best.total_score:.1f})"
        )
    if weather_friendly:
        recommendations.append(
            f"{len(weather_friendly)} layover(s) with good weather for exploring"
        )
    if extended:
        recommendations.append(
            f"{len(extended)} extended layover(s) long enough for a city visit"
        )

    insights = DiscoveryInsights(
        best_overall=best,
        weather_friendly=weather_friendly[:BUCKET_SIZE],
        quick_explore=quick[:BUCKET_SIZE],
        extended_stay=extended[:BUCKET_SIZE],
        recommendations=recommendations,
    )

    durations = [lay.candidate.duration_minutes for lay in layovers]
    cities = Counter(lay.candidate.city for lay in layovers)
    prices = [so.offer.price.total for so in scored_offers if so.offer.price.total > 0]

    market = MarketData(
        average_layover_duration=round(statistics.mean(durations)) if durations else 0,
        popular_cities=[city for city, _ in cities.most_common(TOP_CITIES)],
        price_range=(
            PriceRange(min=min(prices), max=max(prices)) if prices else PriceRange()
        ),
    )
    return insights, market
