from .discovery import DEGRADED_NOTE, LayoverDiscoveryService
from .enrichment import LayoverEnricher
from .extraction import extract

__all__ = ["DEGRADED_NOTE", "LayoverDiscoveryService", "LayoverEnricher", "extract"]
