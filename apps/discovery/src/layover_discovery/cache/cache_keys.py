"""Cache key builders for consistent namespacing."""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layover_core.schemas import SearchRequest


def _constraints_digest(request: SearchRequest) -> str:
    payload = {
        "preferences": request.preferences.model_dump(mode="json"),
        "max_connections": request.max_connections,
        "currency": request.currency,
    }
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.md5(raw.encode()).hexdigest()[:12]


def search_key(request: SearchRequest) -> str:
    """Build cache key for a full discovery result."""
    return_date = request.return_date.isoformat() if request.return_date else "-"
    layovers = "L" if request.prefer_layovers else "A"
    return (
        f"discover:{request.origin}:{request.destination}:"
        f"{request.departure_date.isoformat()}:{return_date}:"
        f"{request.passengers.cache_token()}:{request.cabin_class.value}:"
        f"{layovers}:{_constraints_digest(request)}"
    )


def market_key(request: SearchRequest) -> str:
    """Build cache key for route market insights."""
    return (
        f"market:{request.origin}:{request.destination}:"
        f"{request.departure_date.isoformat()}:{request.currency}"
    )


def airport_profile_key(airport: str) -> str:
    """Build cache key for an airport amenities/hotels/safety profile."""
    return f"airport_profile:{airport.upper()}"
