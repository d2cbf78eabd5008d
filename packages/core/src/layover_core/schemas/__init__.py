"""Core schemas for the layover discovery engine."""

from .enums import (
    ActivityType,
    CabinClass,
    DataSource,
    DedupPolicy,
    Direction,
    TransitMode,
    VisaRequirement,
)
from .layover import (
    Activity,
    AirportAmenities,
    AirportProfile,
    Coordinates,
    EnrichedLayover,
    HotelOption,
    LayoverCandidate,
    SafetyRating,
    Score,
    TransitAnalysis,
    TransitOption,
    WeatherSnapshot,
)
from .offer import Airline, Endpoint, Layover, Offer, Price, Segment
from .result import (
    AggregatedResults,
    DiscoveryInsights,
    DiscoveryResult,
    MarketData,
    MarketInsights,
    PriceRange,
    ProviderErrorInfo,
    ScoredOffer,
)
from .search import LayoverPreferences, PassengerCount, SearchRequest

__all__ = [
    "Activity",
    "ActivityType",
    "AggregatedResults",
    "Airline",
    "AirportAmenities",
    "AirportProfile",
    "CabinClass",
    "Coordinates",
    "DataSource",
    "DedupPolicy",
    "Direction",
    "DiscoveryInsights",
    "DiscoveryResult",
    "Endpoint",
    "EnrichedLayover",
    "HotelOption",
    "Layover",
    "LayoverCandidate",
    "LayoverPreferences",
    "MarketData",
    "MarketInsights",
    "Offer",
    "PassengerCount",
    "Price",
    "PriceRange",
    "ProviderErrorInfo",
    "SafetyRating",
    "Score",
    "ScoredOffer",
    "SearchRequest",
    "Segment",
    "TransitAnalysis",
    "TransitMode",
    "TransitOption",
    "VisaRequirement",
    "WeatherSnapshot",
]
