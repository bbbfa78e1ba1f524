"""
Aggregation service merging astronomy events across all providers.

Every operation fans out to the configured providers one after the other,
in registration order. A provider that fails is skipped and the remaining
providers are still queried: partial data is returned rather than an
error. Callers who need to know which providers were skipped pass a list
that collects one ``ProviderFailure`` per skipped call.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TypeVar

from ..api.base_provider import EventProvider
from ..models.astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange
from ..utils.time_utils import start_of_day

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ProviderFailure:
    """A provider call skipped during fan-out."""

    provider_name: str
    operation: str
    error: Exception


class AstronomyEventService:
    """
    Business logic for querying astronomy events.

    Stateless per call; the provider collection is fixed at construction.
    """

    def __init__(self, providers: Sequence[EventProvider]):
        self._providers: Tuple[EventProvider, ...] = tuple(providers)
        logger.info(f"AstronomyEventService initialized with {len(self._providers)} providers")

    @property
    def provider_names(self) -> List[str]:
        return [provider.get_name() for provider in self._providers]

    async def get_upcoming_events(
        self,
        time_range: TimeRange,
        failures: Optional[List[ProviderFailure]] = None,
    ) -> List[AstronomyEvent]:
        """
        Get events within a time range from every provider.

        Args:
            time_range: Window to query
            failures: Optional list collecting skipped providers

        Returns:
            Events in provider order; empty when every provider fails
        """
        return await self._fan_out(
            "get_events", lambda provider: provider.get_events(time_range), failures
        )

    async def get_event_by_id(
        self, event_id: str, failures: Optional[List[ProviderFailure]] = None
    ) -> Optional[AstronomyEvent]:
        """
        Get the first event with the given id.

        Ids are only unique per provider; when several providers know the
        id, the first provider in registration order wins.

        Returns:
            The event, or None if no provider has it
        """
        for provider in self._providers:
            try:
                event = await provider.get_event_by_id(event_id)
            except Exception as e:
                self._record_failure(failures, provider, "get_event_by_id", e)
                continue
            if event is not None:
                return event
        return None

    async def get_events_by_date(
        self, day: datetime, failures: Optional[List[ProviderFailure]] = None
    ) -> List[AstronomyEvent]:
        """Get events for the 24 hours starting at midnight of ``day``."""
        start = start_of_day(day)
        return await self.get_events_by_date_range(start, start + timedelta(hours=24), failures)

    async def get_events_by_date_range(
        self,
        start: datetime,
        end: datetime,
        failures: Optional[List[ProviderFailure]] = None,
    ) -> List[AstronomyEvent]:
        """Get events between two timestamps."""
        return await self.get_upcoming_events(TimeRange(start=start, end=end), failures)

    async def get_events_by_type(
        self,
        event_type: AstronomyEventType,
        time_range: TimeRange,
        failures: Optional[List[ProviderFailure]] = None,
    ) -> List[AstronomyEvent]:
        """Get events of one type; each provider filters its own results."""
        return await self._fan_out(
            "get_events_by_type",
            lambda provider: provider.get_events_by_type(event_type, time_range),
            failures,
        )

    async def _fan_out(
        self,
        operation: str,
        call: Callable[[EventProvider], Awaitable[List[T]]],
        failures: Optional[List[ProviderFailure]],
    ) -> List[T]:
        merged: List[T] = []
        for provider in self._providers:
            try:
                results = await call(provider)
            except Exception as e:
                self._record_failure(failures, provider, operation, e)
                continue
            merged.extend(results)
        return merged

    @staticmethod
    def _record_failure(
        failures: Optional[List[ProviderFailure]],
        provider: EventProvider,
        operation: str,
        error: Exception,
    ) -> None:
        if failures is not None:
            failures.append(ProviderFailure(provider.get_name(), operation, error))
