"""Current weather at a layover city via the OpenWeatherMap API."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from layover_core.schemas import WeatherSnapshot
from layover_discovery.config import settings

logger = logging.getLogger(__name__)

FALLBACK_RECOMMENDATION = "Weather data temporarily unavailable - showing typical conditions"
BAD_OUTDOOR_CONDITIONS = frozenset({"thunderstorm", "snow", "heavy rain"})


def is_good_for_outdoor(
    temperature: float, precipitation: float, wind_kmh: float, condition: str
) -> bool:
    return (
        10 <= temperature <= 30
        and precipitation < 2
        and wind_kmh < 20
        and condition.lower() not in BAD_OUTDOOR_CONDITIONS
    )


def weather_recommendations(
    weather: WeatherSnapshot, duration_minutes: int | None = None
) -> list[str]:
    """Advice for the traveler; layover-length tips only when a duration is given."""
    recs: list[str] = []
    if weather.temperature < 5:
        recs.append("Dress warmly - cold weather expected")
        recs.append("Indoor activities recommended")
    elif weather.temperature > 30:
        recs.append("Stay hydrated - hot weather")
        recs.append("Air-conditioned venues recommended")
    elif 18 <= weather.temperature <= 25:
        recs.append("Perfect weather for outdoor exploration")

    if weather.precipitation > 0:
        recs.append("Bring umbrella - rain expected")
        if weather.precipitation > 5:
            recs.append("Indoor activities strongly recommended")

    if weather.wind_speed > 15:
        recs.append("Strong winds - secure belongings")

    if duration_minutes is not None:
        if duration_minutes >= 240 and weather.is_good_for_outdoor:
            recs.append("Great conditions for city tour")
        elif duration_minutes >= 120 and not weather.is_good_for_outdoor:
            recs.append("Perfect for indoor shopping or dining")
    return recs


def for_layover(weather: WeatherSnapshot, duration_minutes: int) -> WeatherSnapshot:
    """Recompute recommendations for a specific layover length."""
    if weather.is_fallback:
        return weather
    return weather.model_copy(
        update={"recommendations": weather_recommendations(weather, duration_minutes)}
    )


def fallback_snapshot() -> WeatherSnapshot:
    """Typical mild conditions, used whenever real data is unavailable."""
    return WeatherSnapshot(
        temperature=22,
        feels_like=22,
        condition="Clear",
        description="clear sky",
        humidity=60,
        wind_speed=10,
        visibility=10,
        cloudiness=20,
        precipitation=0,
        is_good_for_outdoor=True,
        recommendations=[FALLBACK_RECOMMENDATION],
        is_fallback=True,
    )


def parse_current_weather(data: dict[str, Any]) -> WeatherSnapshot:
    """Convert an OpenWeatherMap ``/weather`` body into metric units."""
    main = data["main"]
    condition = data["weather"][0]
    precipitation = (data.get("rain") or {}).get("1h") or (data.get("snow") or {}).get(
        "1h"
    ) or 0.0
    wind_kmh = float(data.get("wind", {}).get("speed", 0.0)) * 3.6
    temperature = round(float(main["temp"]))

    snapshot = WeatherSnapshot(
        temperature=temperature,
        feels_like=round(float(main.get("feels_like", main["temp"]))),
        condition=condition["main"],
        description=condition.get("description", ""),
        humidity=main.get("humidity", 50),
        wind_speed=round(wind_kmh, 1),
        visibility=(data.get("visibility") or 10000) / 1000,
        cloudiness=data.get("clouds", {}).get("all", 0),
        precipitation=float(precipitation),
        is_good_for_outdoor=is_good_for_outdoor(
            float(main["temp"]),
            float(precipitation),
            wind_kmh,
            condition["main"],
        )
        and condition.get("description", "").lower() not in BAD_OUTDOOR_CONDITIONS,
    )
    return snapshot.model_copy(
        update={"recommendations": weather_recommendations(snapshot)}
    )


class OpenWeatherClient:
    """Weather lookups that never raise.

    Any transport, HTTP or payload failure yields :func:`fallback_snapshot`.
    Successful lookups are memoized per rounded coordinate pair.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        memo_seconds: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.openweather_api_key
        self._memo_seconds = (
            settings.weather_memo_seconds if memo_seconds is None else memo_seconds
        )
        self._memo: dict[tuple[float, float], tuple[float, WeatherSnapshot]] = {}
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.openweather_base_url,
            timeout=httpx.Timeout(timeout or settings.enrichment_timeout),
            transport=transport,
        )

    async def current_conditions(self, lat: float, lng: float) -> WeatherSnapshot:
        if not self._api_key:
            logger.debug("No OpenWeather API key, using fallback weather")
            return fallback_snapshot()

        key = (round(lat, 2), round(lng, 2))
        cached = self._memo.get(key)
        if cached is not None and cached[0] > time.monotonic():
            return cached[1]

        try:
            resp = await self._client.get(
                "/weather",
                params={"lat": lat, "lon": lng, "appid": self._api_key, "units": "metric"},
            )
            resp.raise_for_status()
            snapshot = parse_current_weather(resp.json())
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Weather lookup failed for %.2f,%.2f: %s", lat, lng, exc)
            return fallback_snapshot()

        self._memo[key] = (time.monotonic() + self._memo_seconds, snapshot)
        return snapshot

    async def close(self) -> None:
        await self._client.aclose()
