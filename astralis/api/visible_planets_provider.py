"""
Visible planets provider.

The upstream service answers for a single date at a fixed observer
location, so only the start of the requested range is sent; the range end
is ignored. Each observable body becomes one TRANSIT event lasting a day.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from pydantic import BaseModel, StrictFloat, StrictStr, ValidationError, field_validator

from ..models.astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange
from ..utils.time_utils import format_date
from .base_provider import EventProvider, LookupWindow
from .http_client import (
    AstronomyDataException,
    AstronomyStatusException,
    HTTPClient,
)

logger = logging.getLogger(__name__)

VISIBILITY_DURATION = timedelta(hours=24)

DEFAULT_LATITUDE = 32.0
DEFAULT_LONGITUDE = -98.0
DEFAULT_LOOKUP_WINDOW = LookupWindow(days_forward=7)


class PlanetVisibility(BaseModel):
    """
    One observable body in the visibility response.

    Types are checked strictly; a JSON null reads as the field's zero value.
    """

    name: StrictStr = ""
    constellation: StrictStr = ""
    altitude: StrictFloat = 0.0
    azimuth: StrictFloat = 0.0

    @field_validator("name", "constellation", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("altitude", "azimuth", mode="before")
    @classmethod
    def null_to_zero(cls, v):
        return 0.0 if v is None else v


class VisibilityResponse(BaseModel):
    """Visibility response body."""

    data: Optional[List[PlanetVisibility]] = None


def planet_event_id(name: str, date_string: str) -> str:
    """Id for a body on a date; the same pair always gives the same id."""
    return f"planet-{name}-{date_string}"


class VisiblePlanetsProvider(EventProvider):
    """Planets visible from the configured observer location."""

    BASE_URL = "https://api.visibleplanets.dev/v3"
    SOURCE_NAME = "Visible Planets API"

    def __init__(
        self,
        http_client: HTTPClient,
        latitude: float = DEFAULT_LATITUDE,
        longitude: float = DEFAULT_LONGITUDE,
        lookup_window: LookupWindow = DEFAULT_LOOKUP_WINDOW,
    ):
        super().__init__(http_client, lookup_window)
        self._latitude = latitude
        self._longitude = longitude

    def get_name(self) -> str:
        return "Visible Planets API"

    async def get_events(self, time_range: TimeRange) -> List[AstronomyEvent]:
        date_string = format_date(time_range.start)
        params = {
            "latitude": f"{self._latitude:g}",
            "longitude": f"{self._longitude:g}",
            "date": date_string,
        }

        response = await self._http_client.get(self.BASE_URL, params)
        if not response.ok:
            logger.warning(f"Visible planets API returned status: {response.status_code}")
            raise AstronomyStatusException(
                f"astronomy API returned status: {response.status_code} {response.reason}",
                response.status_code,
            )

        if response.data is None:
            return []
        try:
            visibility = VisibilityResponse.model_validate(response.data)
        except ValidationError as e:
            raise AstronomyDataException(f"Decoding visibility response: {e}") from e

        events = [
            self._create_planet_event(planet, time_range, date_string)
            for planet in visibility.data or []
        ]
        logger.debug(f"Visible planets fetched {len(events)} bodies for {date_string}")
        return events

    def _create_planet_event(
        self, planet: PlanetVisibility, time_range: TimeRange, date_string: str
    ) -> AstronomyEvent:
        position = f"altitude {planet.altitude:.2f}° and azimuth {planet.azimuth:.2f}°"
        return AstronomyEvent(
            event_id=planet_event_id(planet.name, date_string),
            title=f"{planet.name} Visible in {planet.constellation}",
            description=f"{planet.name} is visible at {position}",
            start_time=time_range.start,
            end_time=time_range.start + VISIBILITY_DURATION,
            event_type=AstronomyEventType.TRANSIT,
            visibility=f"Altitude: {planet.altitude:.2f}°, Azimuth: {planet.azimuth:.2f}°",
            location=planet.constellation,
            source=self.SOURCE_NAME,
        )
