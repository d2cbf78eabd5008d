"""Layover candidate, enrichment context and score DTOs."""

from __future__ import annotations

from datetime import datetime, time  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import ActivityType, Direction, TransitMode, VisaRequirement


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class LayoverCandidate(BaseModel):
    """A viable connection window together with the offer it came from."""

    model_config = ConfigDict(frozen=True)

    id: str
    offer_id: str
    airport: str
    city: str
    country: str
    duration_minutes: int
    arrival_time: datetime
    departure_time: datetime
    direction: Direction = Direction.OUTBOUND
    coordinates: Coordinates | None = None
    total_price: float = 0.0
    currency: str = "USD"
    airline: str = "Unknown"


class WeatherSnapshot(BaseModel):
    """Current conditions at a layover city (metric units)."""

    model_config = ConfigDict(frozen=True)

    temperature: float
    feels_like: float
    condition: str
    description: str
    humidity: float = 50.0
    wind_speed: float = Field(default=0.0, description="km/h")
    visibility: float = Field(default=10.0, description="km")
    cloudiness: float = 0.0
    precipitation: float = Field(default=0.0, description="mm in the last hour")
    is_good_for_outdoor: bool = True
    recommendations: list[str] = Field(default_factory=list)
    is_fallback: bool = False


class TransitOption(BaseModel):
    """One way of getting from the airport into the city centre."""

    model_config = ConfigDict(frozen=True)

    mode: TransitMode
    duration_minutes: int
    cost: float
    frequency_minutes: int = 0
    operating_start: time
    operating_end: time
    accessible: bool = True
    luggage_friendly: bool = True
    direct_route: bool = True


class TransitAnalysis(BaseModel):
    """Whether the traveler can usefully leave the airport."""

    model_config = ConfigDict(frozen=True)

    can_leave_airport: bool
    minimum_layover_required: int
    available_time_in_city: int
    transit_options: list[TransitOption] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0, le=1)


class Activity(BaseModel):
    """A curated thing to do during a layover."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    city: str = ""
    categories: list[str] = Field(default_factory=list)
    activity_type: ActivityType = ActivityType.INDOOR
    duration_minutes: int = 60
    rating: float = Field(default=3.5, ge=0, le=5)
    price: float = 0.0
    currency: str = "USD"
    requires_transit: bool = False
    booking_url: str | None = None
    weather_score: float | None = None
    weather_recommendation: str | None = None
    warnings: list[str] = Field(default_factory=list)


class AirportAmenities(BaseModel):
    model_config = ConfigDict(frozen=True)

    free_wifi: bool = False
    lounges: list[str] = Field(default_factory=list)
    showers: bool = False
    sleeping_areas: bool = False
    restaurant_count: int = 0
    shopping: bool = False
    spa: bool = False
    currency_exchange: bool = False
    medical_center: bool = False
    children_area: bool = False
    rating: float = Field(default=3.0, ge=0, le=5)


class HotelOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    distance_km: float
    rating: float
    price: float
    day_room_available: bool = False


class SafetyRating(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0, le=10)
    level: str = "moderate"


class AirportProfile(BaseModel):
    """Slow-changing airport context: comfort, hotels and safety."""

    model_config = ConfigDict(frozen=True)

    airport: str
    amenities: AirportAmenities = Field(default_factory=AirportAmenities)
    hotels: list[HotelOption] = Field(default_factory=list)
    safety: SafetyRating = Field(default_factory=lambda: SafetyRating(score=7.0))


class Score(BaseModel):
    """Weighted desirability of one layover."""

    model_config = ConfigDict(frozen=True)

    total: float = Field(ge=0, le=1)
    breakdown: dict[str, float]
    recommendation: str
    insights: list[str] = Field(default_factory=list)


class EnrichedLayover(BaseModel):
    """A layover candidate with all external context attached."""

    model_config = ConfigDict(frozen=True)

    candidate: LayoverCandidate
    weather: WeatherSnapshot
    transit: TransitAnalysis
    amenities: AirportAmenities
    hotels: list[HotelOption] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    safety: SafetyRating
    visa_requirement: VisaRequirement = VisaRequirement.NONE
    score: Score | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def visa_required(self) -> bool:
        return self.visa_requirement in (
            VisaRequirement.EVISA,
            VisaRequirement.VISA_REQUIRED,
        )

    @property
    def total_score(self) -> float:
        return self.score.total if self.score is not None else 0.0
