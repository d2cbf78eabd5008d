"""Pydantic-compatible enums shared across the discovery pipeline."""

from enum import StrEnum


class DataSource(StrEnum):
    """Flight-data provider an offer came from."""

    DUFFEL = "DUFFEL"
    KIWI_API = "KIWI_API"
    GDS = "GDS"


class CabinClass(StrEnum):
    """Cabin class for the itinerary."""

    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"


class Direction(StrEnum):
    """Which leg of the trip a segment or layover belongs to."""

    OUTBOUND = "OUTBOUND"
    INBOUND = "INBOUND"


class ActivityType(StrEnum):
    """Whether an activity happens indoors, outdoors or both."""

    INDOOR = "INDOOR"
    OUTDOOR = "OUTDOOR"
    MIXED = "MIXED"


class TransitMode(StrEnum):
    """Ground transport from the airport into the city."""

    TRAIN = "TRAIN"
    METRO = "METRO"
    BUS = "BUS"
    TAXI = "TAXI"
    WALK = "WALK"


class VisaRequirement(StrEnum):
    """Entry requirement for leaving the airport in a layover country."""

    NONE = "NONE"
    VISA_FREE = "VISA_FREE"
    EVISA = "EVISA"
    VISA_REQUIRED = "VISA_REQUIRED"


class DedupPolicy(StrEnum):
    """Which offer survives when several providers return the same itinerary."""

    FIRST_SEEN = "FIRST_SEEN"
    LOWEST_PRICE = "LOWEST_PRICE"
