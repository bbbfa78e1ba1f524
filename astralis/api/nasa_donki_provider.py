"""
NASA DONKI provider for solar activity (coronal mass ejection) events.

DONKI answers with a JSON array of loosely-typed records. The mapping is
strict: a single record with a missing field, a non-string field or an
unparseable start time fails the whole fetch.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from ..models.astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange
from ..utils.time_utils import format_date
from .base_provider import EventProvider, LookupWindow
from .http_client import (
    AstronomyDataException,
    AstronomyStatusException,
    HTTPClient,
)

logger = logging.getLogger(__name__)

# Minute precision, always UTC
DONKI_TIME_FORMAT = "%Y-%m-%dT%H:%MZ"
_DONKI_TIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}Z$")

# DONKI has no end time for a CME; events are assumed to last a day
CME_DURATION = timedelta(hours=24)

DEFAULT_LOOKUP_WINDOW = LookupWindow(months_back=1, months_forward=1)

_STRING_FIELDS = ("activityID", "note", "catalog", "sourceLocation", "startTime")


class NASADonkiProvider(EventProvider):
    """Coronal mass ejections from the NASA DONKI API."""

    BASE_URL = "https://api.nasa.gov/DONKI/CME"
    SOURCE_NAME = "NASA DONKI API"

    def __init__(
        self,
        http_client: HTTPClient,
        api_key: str,
        lookup_window: LookupWindow = DEFAULT_LOOKUP_WINDOW,
    ):
        super().__init__(http_client, lookup_window)
        self._api_key = api_key

    def get_name(self) -> str:
        return "NASA API"

    async def get_events(self, time_range: TimeRange) -> List[AstronomyEvent]:
        params = {
            "start_date": format_date(time_range.start),
            "end_date": format_date(time_range.end),
            "api_key": self._api_key,
        }

        response = await self._http_client.get(self.BASE_URL, params)
        if not response.ok:
            logger.warning(f"NASA API returned status: {response.status_code}")
            raise AstronomyStatusException(
                f"NASA API returned status: {response.status_code} {response.reason}",
                response.status_code,
            )

        raw_events = response.data
        if raw_events is None:
            return []
        if not isinstance(raw_events, list):
            raise AstronomyDataException(
                f"Expected a list of CME events, got {type(raw_events).__name__}"
            )

        events = [self._create_cme_event(raw) for raw in raw_events]
        logger.debug(
            f"NASA DONKI fetched {len(events)} CME events for "
            f"{params['start_date']} to {params['end_date']}"
        )
        return events

    def _create_cme_event(self, raw: Any) -> AstronomyEvent:
        """Map one raw DONKI record onto the common event model."""
        if not isinstance(raw, dict):
            raise AstronomyDataException(f"Invalid CME record: {raw!r}")

        fields = self._require_strings(raw)
        if not _DONKI_TIME_PATTERN.match(fields["startTime"]):
            raise AstronomyDataException(
                f"Parsing start time: {fields['startTime']!r} does not match YYYY-MM-DDThh:mmZ"
            )
        try:
            start_time = datetime.strptime(
                fields["startTime"], DONKI_TIME_FORMAT
            ).replace(tzinfo=timezone.utc)
        except ValueError as e:
            raise AstronomyDataException(f"Parsing start time: {e}") from e

        return AstronomyEvent(
            event_id=fields["activityID"],
            title=f"Solar CME Event - {fields['sourceLocation']}",
            description=fields["note"],
            start_time=start_time,
            end_time=start_time + CME_DURATION,
            event_type=AstronomyEventType.OTHER,
            location=fields["sourceLocation"],
            source=self.SOURCE_NAME,
        )

    @staticmethod
    def _require_strings(raw: Dict[str, Any]) -> Dict[str, str]:
        fields = {}
        for name in _STRING_FIELDS:
            value = raw.get(name)
            if not isinstance(value, str):
                raise AstronomyDataException(
                    f"CME field {name!r} must be a string, got {type(value).__name__}"
                )
            fields[name] = value
        return fields
