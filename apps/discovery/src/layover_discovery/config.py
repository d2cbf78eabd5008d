"""Discovery service configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from layover_core.schemas import DedupPolicy


class DiscoverySettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    redis_url: str = "redis://localhost:6379/0"
    redis_enabled: bool = True
    cache_key_prefix: str = "layover"

    # Cache TTLs in seconds
    search_cache_ttl: int = 900  # 15 min
    market_cache_ttl: int = 7200  # 2 hours
    airport_profile_cache_ttl: int = 21600  # 6 hours
    local_cache_max_entries: int = 1024

    # Timeouts in seconds
    provider_timeout: float = 10.0
    enrichment_timeout: float = 5.0

    # Default viable layover window (minutes)
    min_layover_minutes: int = 120
    max_layover_minutes: int = 1440

    dedup_policy: DedupPolicy = DedupPolicy.LOWEST_PRICE
    providers: list[str] = ["duffel", "kiwi", "amadeus"]

    # Scoring
    scoring_profile: str = "BALANCED"
    scoring_weights: dict[str, float] | None = None

    # Weather (OpenWeatherMap)
    openweather_api_key: str = ""
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    weather_memo_seconds: int = 900

    # Experiences (Viator partner API)
    viator_api_key: str = ""
    viator_base_url: str = "https://api.viator.com/partner"
    max_activities: int = 6

    # Visa policy: ISO country codes of layover countries
    visa_free_countries: list[str] = [
        "AE", "QA", "TR", "SG", "NL", "DE", "FR", "ES", "CH", "FI",
        "GB", "HK", "KR", "JP", "TW", "MY", "TH",
    ]
    evisa_countries: list[str] = ["US", "AU", "CA", "ET", "KE"]
    visa_required_countries: list[str] = ["CN", "IN", "RU", "EG"]

    max_offers_returned: int = 50

    model_config = SettingsConfigDict(
        env_prefix="LAYOVER_", env_file=".env", extra="ignore"
    )


settings = DiscoverySettings()
