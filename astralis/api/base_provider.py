"""
Abstract event provider shared by every upstream astronomy API adapter.

Each provider turns one external API into common ``AstronomyEvent`` records.
Upstream APIs offer no lookup by id, so ``get_event_by_id`` scans a bounded
window around "now"; an event outside that window cannot be found this way.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange
from ..utils.time_utils import add_months, local_now
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupWindow:
    """Window, relative to now, scanned when looking an event up by id."""

    months_back: int = 0
    months_forward: int = 0
    days_back: int = 0
    days_forward: int = 0

    def resolve(self, now: datetime) -> TimeRange:
        """Turn the relative window into a concrete time range."""
        start = add_months(now, -self.months_back) - timedelta(days=self.days_back)
        end = add_months(now, self.months_forward) + timedelta(days=self.days_forward)
        return TimeRange(start=start, end=end)


class EventProvider(ABC):
    """
    Abstract base class for astronomy event providers.

    Providers are built once at startup and never mutated afterwards.
    """

    def __init__(self, http_client: HTTPClient, lookup_window: LookupWindow):
        self._http_client = http_client
        self._lookup_window = lookup_window

    @property
    def lookup_window(self) -> LookupWindow:
        return self._lookup_window

    @abstractmethod
    async def get_events(self, time_range: TimeRange) -> List[AstronomyEvent]:
        """
        Fetch events for a time range.

        Raises:
            AstronomyAPIException: On transport, status or decoding errors.
                No partial results are returned alongside an error.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get the human-readable provider name."""
        pass

    async def get_event_by_id(self, event_id: str) -> Optional[AstronomyEvent]:
        """
        Find an event by id within the provider's lookup window.

        Returns:
            The matching event, or None when it is not in the window
        """
        time_range = self._lookup_window.resolve(local_now())
        events = await self.get_events(time_range)

        for event in events:
            if event.event_id == event_id:
                return event

        logger.debug(f"{self.get_name()}: no event {event_id!r} in lookup window")
        return None

    async def get_events_by_type(
        self, event_type: AstronomyEventType, time_range: TimeRange
    ) -> List[AstronomyEvent]:
        """Fetch events for a time range keeping only the given type."""
        events = await self.get_events(time_range)
        return [event for event in events if event.event_type == event_type]

    async def shutdown(self) -> None:
        """Release the provider's HTTP resources."""
        await self._http_client.close()
        logger.debug(f"{self.get_name()} provider shutdown complete")
