"""Layover ML - scoring, insights and market estimation."""

from layover_ml.insights import summarize
from layover_ml.market import MarketEstimator
from layover_ml.scoring import (
    WEIGHT_PROFILES,
    LayoverScorer,
    ScoringPolicy,
    ScoringWeights,
)

__all__ = [
    "WEIGHT_PROFILES",
    "LayoverScorer",
    "MarketEstimator",
    "ScoringPolicy",
    "ScoringWeights",
    "summarize",
]
