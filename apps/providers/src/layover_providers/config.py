"""Provider adapter configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER_", env_file=".env", extra="ignore"
    )

    # Duffel
    duffel_access_token: str = ""
    duffel_base_url: str = "https://api.duffel.com"
    duffel_version: str = "v2"

    # Kiwi Tequila API
    kiwi_api_key: str = ""
    kiwi_base_url: str = "https://api.tequila.kiwi.com"

    # Amadeus Self-Service API
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_hostname: str = "test"  # "test" or "production"

    # Per-call timeout (seconds)
    timeout_seconds: float = 10.0

    # Retry policy for provider searches (attempts include the first call)
    retry_attempts: int = 2
    retry_base_delay: float = 0.5
    retry_max_delay: float = 4.0

    # Health check latency above which a provider is reported as degraded
    degraded_after_ms: int = 3000

    max_results: int = 50
    default_max_connections: int = 2
    default_currency: str = "USD"


settings = ProviderSettings()
