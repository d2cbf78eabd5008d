from .cache_keys import airport_profile_key, market_key, search_key
from .redis_client import LocalTTLCache, ResultCache

__all__ = [
    "LocalTTLCache",
    "ResultCache",
    "airport_profile_key",
    "market_key",
    "search_key",
]
