"""Static reference data for major connecting airports.

Coordinates are the airport reference points. City and country are used
to fill in provider payloads that only carry the IATA code.
"""

from __future__ import annotations

from typing import NamedTuple

from layover_core.schemas.layover import Coordinates


class AirportInfo(NamedTuple):
    code: str
    city: str
    country: str
    lat: float
    lng: float
    timezone: str


_AIRPORTS: tuple[AirportInfo, ...] = (
    AirportInfo("DXB", "Dubai", "AE", 25.2532, 55.3657, "Asia/Dubai"),
    AirportInfo("AUH", "Abu Dhabi", "AE", 24.4330, 54.6511, "Asia/Dubai"),
    AirportInfo("DOH", "Doha", "QA", 25.2731, 51.6080, "Asia/Qatar"),
    AirportInfo("IST", "Istanbul", "TR", 41.2751, 28.7519, "Europe/Istanbul"),
    AirportInfo("AMS", "Amsterdam", "NL", 52.3105, 4.7683, "Europe/Amsterdam"),
    AirportInfo("FRA", "Frankfurt", "DE", 50.0379, 8.5622, "Europe/Berlin"),
    AirportInfo("MUC", "Munich", "DE", 48.3538, 11.7861, "Europe/Berlin"),
    AirportInfo("LHR", "London", "GB", 51.4700, -0.4543, "Europe/London"),
    AirportInfo("CDG", "Paris", "FR", 49.0097, 2.5479, "Europe/Paris"),
    AirportInfo("MAD", "Madrid", "ES", 40.4983, -3.5676, "Europe/Madrid"),
    AirportInfo("BCN", "Barcelona", "ES", 41.2974, 2.0833, "Europe/Madrid"),
    AirportInfo("ZRH", "Zurich", "CH", 47.4582, 8.5555, "Europe/Zurich"),
    AirportInfo("HEL", "Helsinki", "FI", 60.3172, 24.9633, "Europe/Helsinki"),
    AirportInfo("SIN", "Singapore", "SG", 1.3644, 103.9915, "Asia/Singapore"),
    AirportInfo("HKG", "Hong Kong", "HK", 22.3080, 113.9185, "Asia/Hong_Kong"),
    AirportInfo("ICN", "Seoul", "KR", 37.4602, 126.4407, "Asia/Seoul"),
    AirportInfo("NRT", "Tokyo", "JP", 35.7720, 140.3929, "Asia/Tokyo"),
    AirportInfo("HND", "Tokyo", "JP", 35.5494, 139.7798, "Asia/Tokyo"),
    AirportInfo("BKK", "Bangkok", "TH", 13.6900, 100.7501, "Asia/Bangkok"),
    AirportInfo("KUL", "Kuala Lumpur", "MY", 2.7456, 101.7099, "Asia/Kuala_Lumpur"),
    AirportInfo("TPE", "Taipei", "TW", 25.0797, 121.2342, "Asia/Taipei"),
    AirportInfo("SYD", "Sydney", "AU", -33.9399, 151.1753, "Australia/Sydney"),
    AirportInfo("JFK", "New York", "US", 40.6413, -73.7781, "America/New_York"),
    AirportInfo("LAX", "Los Angeles", "US", 33.9425, -118.4081, "America/Los_Angeles"),
    AirportInfo("ORD", "Chicago", "US", 41.9742, -87.9073, "America/Chicago"),
    AirportInfo("ATL", "Atlanta", "US", 33.6407, -84.4277, "America/New_York"),
    AirportInfo("DFW", "Dallas", "US", 32.8998, -97.0403, "America/Chicago"),
    AirportInfo("SFO", "San Francisco", "US", 37.6213, -122.3790, "America/Los_Angeles"),
    AirportInfo("YYZ", "Toronto", "CA", 43.6777, -79.6248, "America/Toronto"),
    AirportInfo("ADD", "Addis Ababa", "ET", 8.9779, 38.7993, "Africa/Addis_Ababa"),
    AirportInfo("NBO", "Nairobi", "KE", -1.3192, 36.9278, "Africa/Nairobi"),
    AirportInfo("JNB", "Johannesburg", "ZA", -26.1392, 28.2460, "Africa/Johannesburg"),
)

AIRPORTS: dict[str, AirportInfo] = {a.code: a for a in _AIRPORTS}


def get_airport(code: str) -> AirportInfo | None:
    return AIRPORTS.get(code.upper())


def coordinates_for(code: str) -> Coordinates | None:
    """Reference coordinates for an airport, or None when it is unknown."""
    info = get_airport(code)
    if info is None:
        return None
    return Coordinates(lat=info.lat, lng=info.lng)


def city_for(code: str) -> str:
    info = get_airport(code)
    return info.city if info else ""


def country_for(code: str) -> str:
    info = get_airport(code)
    return info.country if info else ""
