from .airport_profiles import CachedAirportProfiles, CuratedAirportProfiles
from .experiences import CuratedExperienceCatalog, ViatorExperienceProvider, match_activities
from .transit import TransitCalculator
from .visa import VisaPolicy
from .weather import OpenWeatherClient

__all__ = [
    "CachedAirportProfiles",
    "CuratedAirportProfiles",
    "CuratedExperienceCatalog",
    "OpenWeatherClient",
    "TransitCalculator",
    "ViatorExperienceProvider",
    "VisaPolicy",
    "match_activities",
]
