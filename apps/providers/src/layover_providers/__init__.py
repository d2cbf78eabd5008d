"""Layover providers - flight-data adapters and the aggregator."""

from layover_providers.aggregator import ProviderAggregator, ProviderHealth
from layover_providers.base import FlightProvider, filter_itineraries
from layover_providers.registry import PROVIDER_NAMES, build_providers

__all__ = [
    "PROVIDER_NAMES",
    "FlightProvider",
    "ProviderAggregator",
    "ProviderHealth",
    "build_providers",
    "filter_itineraries",
]
