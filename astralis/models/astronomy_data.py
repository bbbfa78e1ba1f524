"""
Astronomy event data models for the Astralis application.

This module contains the common event record every provider maps its
payload into, the closed set of event types and the time window used to
scope every fetch. Events are immutable value objects; validity is a
predicate callers may apply, it is never enforced on creation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.time_utils import format_rfc3339, parse_rfc3339

logger = logging.getLogger(__name__)


class AstronomyEventType(Enum):
    """Enumeration of astronomy event types."""
    METEOR_SHOWER = "METEOR_SHOWER"
    ECLIPSE = "ECLIPSE"
    CONJUNCTION = "CONJUNCTION"
    TRANSIT = "TRANSIT"
    OTHER = "OTHER"

    @classmethod
    def from_value(cls, value: str) -> Optional["AstronomyEventType"]:
        """Look up an event type by its exact wire value."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TimeRange:
    """Query window scoping every provider fetch. ``start <= end`` is not checked."""
    start: datetime
    end: datetime


@dataclass(frozen=True)
class AstronomyEvent:
    """
    Immutable normalized astronomy event.

    ``event_id`` is only unique within the namespace of the provider named
    by ``source``. An unset ``end_time`` means the event is ongoing.
    """
    event_id: str = ""
    title: str = ""
    description: str = ""
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    event_type: AstronomyEventType = AstronomyEventType.OTHER
    visibility: str = ""
    location: str = ""
    source: str = ""

    def is_valid(self) -> bool:
        """Check the event has a title, a description and a start time."""
        return self.title != "" and self.description != "" and self.start_time is not None

    def is_visible(self, at: datetime) -> bool:
        """
        Check whether the event is visible at a given time.

        An event without an end time never expires. An event without a
        start time is treated as having started in the unbounded past.

        Raises:
            ValueError: If ``at`` and the event's times are not both naive
                or both timezone-aware
        """
        for bound in (self.start_time, self.end_time):
            if bound is not None and (bound.tzinfo is None) != (at.tzinfo is None):
                raise ValueError(
                    "Cannot compare naive and timezone-aware datetimes; "
                    "pass a timezone-aware 'at' for timezone-aware events"
                )

        if self.start_time is not None and at < self.start_time:
            return False
        return self.end_time is None or at <= self.end_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert the event to its JSON representation."""
        data: Dict[str, Any] = {
            "id": self.event_id,
            "title": self.title,
            "description": self.description,
            "start_time": format_rfc3339(self.start_time),
            "end_time": format_rfc3339(self.end_time),
            "type": self.event_type.value,
        }
        if self.visibility:
            data["visibility"] = self.visibility
        if self.location:
            data["location"] = self.location
        data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AstronomyEvent":
        """
        Create an event from its JSON representation.

        Raises:
            ValueError: If a timestamp or the event type is malformed
        """
        event_type = AstronomyEventType.from_value(data.get("type", "OTHER"))
        if event_type is None:
            raise ValueError(f"Unknown event type: {data.get('type')!r}")

        start_time = data.get("start_time")
        end_time = data.get("end_time")
        return cls(
            event_id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description", ""),
            start_time=parse_rfc3339(start_time) if start_time else None,
            end_time=parse_rfc3339(end_time) if end_time else None,
            event_type=event_type,
            visibility=data.get("visibility", ""),
            location=data.get("location", ""),
            source=data.get("source", ""),
        )
