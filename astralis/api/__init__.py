"""
Upstream provider integrations for the Astralis application.

Each provider adapts one external API to the common astronomy event model.
"""

from .base_provider import EventProvider, LookupWindow
from .http_client import (
    AioHttpClient,
    AstronomyAPIException,
    AstronomyDataException,
    AstronomyNetworkException,
    AstronomyStatusException,
    HTTPClient,
)
from .nasa_donki_provider import NASADonkiProvider
from .visible_planets_provider import VisiblePlanetsProvider

__all__ = [
    "AioHttpClient",
    "AstronomyAPIException",
    "AstronomyDataException",
    "AstronomyNetworkException",
    "AstronomyStatusException",
    "EventProvider",
    "HTTPClient",
    "LookupWindow",
    "NASADonkiProvider",
    "VisiblePlanetsProvider",
]
