from .airlines import AIRLINE_NAMES, airline_name
from .airports import AIRPORTS, AirportInfo, coordinates_for, get_airport

__all__ = [
    "AIRLINE_NAMES",
    "AIRPORTS",
    "AirportInfo",
    "airline_name",
    "coordinates_for",
    "get_airport",
]
