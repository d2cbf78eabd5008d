"""Search request, passenger and layover preference schemas."""

from __future__ import annotations

from datetime import date  # noqa: TC003

from pydantic import BaseModel, Field, field_validator, model_validator

from .enums import CabinClass

DEFAULT_MIN_LAYOVER_MINUTES = 120
DEFAULT_MAX_LAYOVER_MINUTES = 1440


class PassengerCount(BaseModel):
    """Number of passengers by type."""

    adults: int = Field(default=1, ge=1, le=9)
    children: int = Field(default=0, ge=0, le=8)
    infants: int = Field(default=0, ge=0, le=4)

    @model_validator(mode="after")
    def _validate_totals(self) -> PassengerCount:
        total = self.adults + self.children + self.infants
        if total > 9:
            msg = f"Total passengers ({total}) exceeds maximum of 9"
            raise ValueError(msg)
        if self.infants > self.adults:
            msg = "Each infant requires at least one adult"
            raise ValueError(msg)
        return self

    @property
    def total(self) -> int:
        return self.adults + self.children + self.infants

    def cache_token(self) -> str:
        """Compact, order-independent encoding used in cache keys."""
        return f"a{self.adults}c{self.children}i{self.infants}"


class LayoverPreferences(BaseModel):
    """Traveler constraints applied while extracting and scoring layovers."""

    min_layover_minutes: int = Field(default=DEFAULT_MIN_LAYOVER_MINUTES, ge=0)
    max_layover_minutes: int = Field(default=DEFAULT_MAX_LAYOVER_MINUTES, ge=0)
    preferred_activities: list[str] = Field(default_factory=list)
    has_checked_baggage: bool = False

    @field_validator("preferred_activities")
    @classmethod
    def _normalize_activities(cls, value: list[str]) -> list[str]:
        return sorted({v.strip().lower() for v in value if v.strip()})

    @model_validator(mode="after")
    def _validate_window(self) -> LayoverPreferences:
        if self.min_layover_minutes > self.max_layover_minutes:
            msg = "min_layover_minutes must not exceed max_layover_minutes"
            raise ValueError(msg)
        return self


class SearchRequest(BaseModel):
    """Layover discovery search parameters."""

    origin: str = Field(min_length=3, max_length=3, description="IATA airport code")
    destination: str = Field(
        min_length=3, max_length=3, description="IATA airport code"
    )
    departure_date: date
    return_date: date | None = None
    cabin_class: CabinClass = CabinClass.ECONOMY
    passengers: PassengerCount = Field(default_factory=PassengerCount)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    max_connections: int = Field(default=2, ge=0, le=3)
    prefer_layovers: bool = True
    preferences: LayoverPreferences = Field(default_factory=LayoverPreferences)

    @field_validator("origin", "destination", "currency")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @model_validator(mode="after")
    def _validate_dates(self) -> SearchRequest:
        if self.return_date and self.return_date < self.departure_date:
            msg = "return_date must be after departure_date"
            raise ValueError(msg)
        if self.origin == self.destination:
            msg = "origin and destination must differ"
            raise ValueError(msg)
        return self
