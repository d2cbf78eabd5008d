"""Layover scoring engine with weighted multi-factor evaluation."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

from layover_core.schemas import (
    EnrichedLayover,
    MarketInsights,
    Score,
    TransitMode,
    VisaRequirement,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from layover_core.schemas import Activity, AirportAmenities, WeatherSnapshot

SUBSCORES: tuple[str, ...] = (
    "feasibility",
    "amenities",
    "safety",
    "cost",
    "visa",
    "experience",
    "weather",
)

WEIGHT_PROFILES: dict[str, dict[str, float]] = {
    "BALANCED": {
        "feasibility": 0.30,
        "amenities": 0.20,
        "safety": 0.15,
        "cost": 0.10,
        "visa": 0.10,
        "experience": 0.10,
        "weather": 0.05,
    },
    "EXPLORER": {
        "feasibility": 0.30,
        "amenities": 0.10,
        "safety": 0.10,
        "cost": 0.05,
        "visa": 0.05,
        "experience": 0.25,
        "weather": 0.15,
    },
    "COMFORT": {
        "feasibility": 0.15,
        "amenities": 0.35,
        "safety": 0.20,
        "cost": 0.10,
        "visa": 0.10,
        "experience": 0.05,
        "weather": 0.05,
    },
    "BUDGET": {
        "feasibility": 0.20,
        "amenities": 0.10,
        "safety": 0.10,
        "cost": 0.35,
        "visa": 0.10,
        "experience": 0.10,
        "weather": 0.05,
    },
}

WEIGHT_TOLERANCE = 1e-6

SEVERE_CONDITIONS = frozenset({"thunderstorm", "snow", "tornado", "squall"})


class ScoringWeights(BaseModel):
    """Weight per sub-score. Rejected at construction unless it sums to 1."""

    model_config = ConfigDict(frozen=True)

    feasibility: float = Field(ge=0, le=1)
    amenities: float = Field(ge=0, le=1)
    safety: float = Field(ge=0, le=1)
    cost: float = Field(ge=0, le=1)
    visa: float = Field(ge=0, le=1)
    experience: float = Field(ge=0, le=1)
    weather: float = Field(ge=0, le=1)

    @model_validator(mode="after")
    def _validate_sum(self) -> ScoringWeights:
        total = sum(self.as_dict().values())
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_TOLERANCE):
            msg = f"Scoring weights must sum to 1.0, got {total:.6f}"
            raise ValueError(msg)
        return self

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in SUBSCORES}

    @classmethod
    def from_profile(
        cls, profile: str = "BALANCED", override: dict[str, float] | None = None
    ) -> ScoringWeights:
        """Named profile, optionally replaced wholesale by a deployment override."""
        if override:
            return cls(**override)
        try:
            return cls(**WEIGHT_PROFILES[profile.upper()])
        except KeyError:
            msg = f"Unknown scoring profile: {profile}"
            raise ValueError(msg) from None


class ScoringPolicy(BaseModel):
    """Every threshold the scorer uses, in one table.

    Band tables are ``(limit, score)`` pairs checked in order; the first
    matching limit wins and ``*_tail`` applies when none match.
    """

    model_config = ConfigDict(frozen=True)

    # feasibility: duration < limit
    feasibility_bands: tuple[tuple[float, float], ...] = (
        (45, 0.0),
        (90, 0.5),
        (180, 0.8),
        (480, 1.0),
        (720, 0.7),
    )
    feasibility_tail: float = 0.4
    transit_boost: float = 1.2
    transit_boost_min_minutes: int = 180

    amenity_points: dict[str, float] = Field(
        default_factory=lambda: {
            "free_wifi": 0.2,
            "lounges": 0.15,
            "showers": 0.1,
            "sleeping_areas": 0.15,
            "restaurants": 0.1,
            "shopping": 0.05,
            "spa": 0.1,
            "currency_exchange": 0.05,
            "medical_center": 0.05,
            "children_area": 0.05,
        }
    )
    restaurant_threshold: int = 5

    # cost: price / market average <= limit
    cost_bands: tuple[tuple[float, float], ...] = (
        (0.8, 1.0),
        (0.9, 0.8),
        (1.1, 0.6),
        (1.2, 0.4),
    )
    cost_tail: float = 0.2
    cost_unknown: float = 0.6

    visa_scores: dict[VisaRequirement, float] = Field(
        default_factory=lambda: {
            VisaRequirement.NONE: 1.0,
            VisaRequirement.VISA_FREE: 1.0,
            VisaRequirement.EVISA: 0.7,
            VisaRequirement.VISA_REQUIRED: 0.2,
        }
    )

    experience_empty: float = 0.3
    experience_rating_weight: float = 0.6
    experience_category_bonus: float = 0.05
    experience_diversity_cap: float = 0.2
    experience_interest_weight: float = 0.2

    ideal_temperature: tuple[float, float] = (15, 25)
    acceptable_temperature: tuple[float, float] = (10, 30)
    extreme_temperature: tuple[float, float] = (0, 35)
    temperature_factors: tuple[float, float, float, float] = (1.0, 0.8, 0.6, 0.4)
    # precipitation: mm < limit, zero precipitation scores 1.0
    precipitation_bands: tuple[tuple[float, float], ...] = ((2, 0.8), (5, 0.6))
    precipitation_tail: float = 0.3
    # wind: km/h < limit
    wind_bands: tuple[tuple[float, float], ...] = ((5, 1.0), (10, 0.9), (15, 0.7))
    wind_tail: float = 0.5
    # visibility: km >= limit
    visibility_bands: tuple[tuple[float, float], ...] = ((10, 1.0), (5, 0.8))
    visibility_tail: float = 0.6

    excellent_total: float = 0.8
    good_total: float = 0.6
    average_total: float = 0.4

    long_layover_minutes: int = 480
    cannot_leave_notice_minutes: int = 240
    severe_weather_score: float = 0.3
    great_amenities: float = 0.8
    very_safe: float = 0.9


DEFAULT_POLICY = ScoringPolicy()


def _below(value: float, bands: Iterable[tuple[float, float]], tail: float) -> float:
    for limit, score in bands:
        if value < limit:
            return score
    return tail


def _at_most(value: float, bands: Iterable[tuple[float, float]], tail: float) -> float:
    for limit, score in bands:
        if value <= limit:
            return score
    return tail


def _at_least(value: float, bands: Iterable[tuple[float, float]], tail: float) -> float:
    for limit, score in bands:
        if value >= limit:
            return score
    return tail


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


class LayoverScorer:
    """Scores enriched layovers against a weight table and a policy table.

    Pure: the score depends only on the enriched layover, the market
    context and the traveler's interests.
    """

    def __init__(
        self,
        weights: ScoringWeights | None = None,
        policy: ScoringPolicy | None = None,
    ) -> None:
        self._weights = weights or ScoringWeights.from_profile("BALANCED")
        self._policy = policy or DEFAULT_POLICY

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def score(
        self,
        enriched: EnrichedLayover,
        market: MarketInsights,
        interests: Sequence[str] = (),
    ) -> Score:
        """Compute the weighted score, recommendation and insights."""
        candidate = enriched.candidate
        breakdown = {
            "feasibility": self.score_feasibility(
                candidate.duration_minutes, can_leave=enriched.transit.can_leave_airport
            ),
            "amenities": self.score_amenities(enriched.amenities),
            "safety": _clamp(enriched.safety.score / 10),
            "cost": self.score_cost(candidate.total_price, market),
            "visa": self._policy.visa_scores.get(enriched.visa_requirement, 1.0),
            "experience": self.score_experience(enriched.activities, interests),
            "weather": self.score_weather(enriched.weather),
        }
        breakdown = {name: round(_clamp(value), 4) for name, value in breakdown.items()}

        weights = self._weights.as_dict()
        weighted = sum(weights[name] * breakdown[name] for name in SUBSCORES)
        total = round(_clamp(weighted), 1)

        return Score(
            total=total,
            breakdown=breakdown,
            recommendation=self._recommendation(
                weighted, can_leave=enriched.transit.can_leave_airport
            ),
            insights=self._insights(breakdown, enriched),
        )

    def score_feasibility(self, minutes: int, *, can_leave: bool) -> float:
        p = self._policy
        score = _below(minutes, p.feasibility_bands, p.feasibility_tail)
        if can_leave and minutes >= p.transit_boost_min_minutes:
            score = min(score * p.transit_boost, 1.0)
        return score

    def score_amenities(self, amenities: AirportAmenities) -> float:
        points = self._policy.amenity_points
        present = {
            "free_wifi": amenities.free_wifi,
            "lounges": bool(amenities.lounges),
            "showers": amenities.showers,
            "sleeping_areas": amenities.sleeping_areas,
            "restaurants": amenities.restaurant_count
            > self._policy.restaurant_threshold,
            "shopping": amenities.shopping,
            "spa": amenities.spa,
            "currency_exchange": amenities.currency_exchange,
            "medical_center": amenities.medical_center,
            "children_area": amenities.children_area,
        }
        score = sum(points.get(name, 0.0) for name, has in present.items() if has)
        return min(score, 1.0)

    def score_cost(self, price: float, market: MarketInsights) -> float:
        """Cheaper than the route average scores higher."""
        p = self._policy
        if price <= 0 or market.average_price <= 0:
            return p.cost_unknown
        return _at_most(price / market.average_price, p.cost_bands, p.cost_tail)

    def score_experience(
        self, activities: Sequence[Activity], interests: Sequence[str] = ()
    ) -> float:
        p = self._policy
        if not activities:
            return p.experience_empty

        avg_rating = sum(a.rating for a in activities) / len(activities)
        score = p.experience_rating_weight * (avg_rating / 5)

        categories = {c.lower() for a in activities for c in a.categories}
        score += min(
            len(categories) * p.experience_category_bonus, p.experience_diversity_cap
        )

        wanted = [i.lower() for i in interests if i]
        if wanted:
            matching = [
                a
                for a in activities
                if any(w in c.lower() for c in a.categories for w in wanted)
            ]
            score += len(matching) / len(activities) * p.experience_interest_weight

        return min(score, 1.0)

    def score_weather(self, weather: WeatherSnapshot) -> float:
        p = self._policy
        ideal, good, poor, extreme = p.temperature_factors
        temp = weather.temperature
        if p.ideal_temperature[0] <= temp <= p.ideal_temperature[1]:
            score = ideal
        elif p.acceptable_temperature[0] <= temp <= p.acceptable_temperature[1]:
            score = good
        elif temp < p.extreme_temperature[0] or temp > p.extreme_temperature[1]:
            score = extreme
        else:
            score = poor

        if weather.precipitation > 0:
            score *= _below(
                weather.precipitation, p.precipitation_bands, p.precipitation_tail
            )
        score *= _below(weather.wind_speed, p.wind_bands, p.wind_tail)
        score *= _at_least(weather.visibility, p.visibility_bands, p.visibility_tail)
        return _clamp(score)

    def price_score(self, price: float, market: MarketInsights) -> float:
        return self.score_cost(price, market)

    def _recommendation(self, total: float, *, can_leave: bool) -> str:
        p = self._policy
        if total >= p.excellent_total:
            if can_leave:
                return "Excellent layover with city exploration opportunity"
            return "Excellent layover opportunity"
        if total >= p.good_total:
            if can_leave:
                return "Good layover with limited city time"
            return "Good layover experience"
        if total >= p.average_total:
            return "Average layover"
        return "Consider alternative routing"

    def _insights(
        self, breakdown: dict[str, float], enriched: EnrichedLayover
    ) -> list[str]:
        p = self._policy
        candidate = enriched.candidate
        transit = enriched.transit
        weather = enriched.weather
        insights: list[str] = []

        if breakdown["feasibility"] >= 0.8:
            insights.append("Perfect layover duration for rest and exploration")
        elif breakdown["feasibility"] < 0.5:
            insights.append("Short layover - stay near your gate")

        if transit.can_leave_airport:
            insights.append(
                f"{transit.available_time_in_city} minutes available for city exploration"
            )
            if transit.transit_options and transit.transit_options[0].mode in (
                TransitMode.TRAIN,
                TransitMode.METRO,
            ):
                insights.append("Fast rail connection to city center")
        elif candidate.duration_minutes >= p.cannot_leave_notice_minutes:
            insights.append("Cannot leave airport due to time constraints")

        severe = (
            weather.condition.lower() in SEVERE_CONDITIONS
            or breakdown["weather"] <= p.severe_weather_score
        )
        if weather.is_good_for_outdoor and not severe:
            insights.append(
                f"Great weather for outdoor activities ({weather.temperature:.0f}°C)"
            )
        elif severe:
            insights.append("Severe weather expected - stay inside the terminal")
        elif weather.precipitation > 0:
            insights.append("Rain expected - plan indoor activities")

        if breakdown["amenities"] >= p.great_amenities:
            insights.append("Excellent airport facilities available")
        if breakdown["safety"] >= p.very_safe:
            insights.append("Very safe airport and surrounding area")
        if candidate.duration_minutes >= p.long_layover_minutes:
            insights.append("Consider booking airport hotel for extended layover")

        if enriched.visa_requirement is VisaRequirement.EVISA:
            insights.append(f"E-visa needed to leave the airport in {candidate.country}")
        elif enriched.visa_requirement is VisaRequirement.VISA_REQUIRED:
            insights.append(f"Visa required to leave the airport in {candidate.country}")

        insights.extend(weather.recommendations[:2])
        return insights
