"""Heuristic route price estimates and calibration against observed offers."""

from __future__ import annotations

import statistics
from collections import Counter
from datetime import timedelta
from typing import TYPE_CHECKING

from layover_core.schemas import MarketInsights

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date

    from layover_core.schemas import Offer, SearchRequest

BASE_PRICE = 800.0
LONG_HAUL_ROUTES = frozenset({"JFK-LHR", "LAX-NRT", "DXB-JFK"})
LONG_HAUL_MULTIPLIER = 1.5
PEAK_MONTHS = frozenset({6, 7, 8, 12})
SHOULDER_MONTHS = frozenset({4, 5, 9, 10})
CHEAPEST_DATE_WINDOW_DAYS = 3
ESTIMATE_CONFIDENCE = 0.5


def route_multiplier(origin: str, destination: str) -> float:
    if f"{origin}-{destination}" in LONG_HAUL_ROUTES:
        return LONG_HAUL_MULTIPLIER
    return 1.0


def seasonal_multiplier(day: date) -> float:
    if day.month in PEAK_MONTHS:
        return 1.3
    if day.month in SHOULDER_MONTHS:
        return 1.1
    return 0.9


class MarketEstimator:
    """Route-level price expectations without any external data source.

    The estimate is base price x route multiplier x seasonal multiplier and
    is refined with the prices actually observed for a search.
    """

    def __init__(self, base_price: float = BASE_PRICE) -> None:
        self._base_price = base_price

    def estimate(self, request: SearchRequest) -> MarketInsights:
        route = route_multiplier(request.origin, request.destination)
        season = seasonal_multiplier(request.departure_date)
        return MarketInsights(
            average_price=round(self._base_price * route * season),
            price_confidence=ESTIMATE_CONFIDENCE,
            cheapest_dates=self._cheapest_dates(request.departure_date),
            popular_routes=[f"{request.origin}-{request.destination}"],
            seasonal_multiplier=season,
            route_multiplier=route,
            currency=request.currency,
        )

    def calibrate(
        self, insights: MarketInsights, offers: Sequence[Offer]
    ) -> MarketInsights:
        """Re-centre the estimate on observed prices and fill popular routes.

        Only offers priced in the estimate's currency count towards the
        average and its confidence.
        """
        prices = [
            o.price.total
            for o in offers
            if o.price.total > 0 and o.price.currency == insights.currency
        ]
        if not prices:
            return insights

        routes = Counter(
            "-".join([o.origin, *(lay.airport for lay in o.layovers), o.destination])
            for o in offers
        )
        return insights.model_copy(
            update={
                "average_price": round(statistics.mean(prices), 2),
                "price_confidence": self._confidence(len(prices)),
                "popular_routes": [route for route, _ in routes.most_common(5)],
            }
        )

    @staticmethod
    def _confidence(samples: int) -> float:
        if samples < 5:
            return 0.3
        if samples <= 20:
            return 0.6
        return 0.8

    @staticmethod
    def _cheapest_dates(departure: date) -> list[date]:
        """Candidate dates around departure, cheapest season first."""
        window = [
            departure + timedelta(days=offset)
            for offset in range(-CHEAPEST_DATE_WINDOW_DAYS, CHEAPEST_DATE_WINDOW_DAYS + 1)
        ]
        return sorted(
            window,
            key=lambda d: (seasonal_multiplier(d), d.weekday() in (4, 6), d),
        )[:3]
