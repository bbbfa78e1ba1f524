"""
Global pytest configuration and fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from astralis.api.base_provider import EventProvider, LookupWindow
from astralis.api.http_client import AstronomyAPIResponse, HTTPClient
from astralis.models.astronomy_data import (
    AstronomyEvent,
    AstronomyEventType,
    TimeRange,
)


class FakeHTTPClient(HTTPClient):
    """HTTP client returning canned responses and recording requests."""

    def __init__(self, data: Any = None, status_code: int = 200, error: Optional[Exception] = None):
        self.data = data
        self.status_code = status_code
        self.error = error
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    async def get(self, url: str, params: Dict[str, Any]) -> AstronomyAPIResponse:
        self.requests.append({"url": url, "params": dict(params)})
        if self.error is not None:
            raise self.error
        return AstronomyAPIResponse(
            status_code=self.status_code,
            reason="OK" if self.status_code == 200 else "Error",
            data=self.data,
            timestamp=datetime.now(),
            url=url,
        )

    async def close(self) -> None:
        self.closed = True


class StubProvider(EventProvider):
    """
    In-memory provider.

    Returns the events whose start time falls strictly inside the requested
    range, or raises ``error`` when one is set.
    """

    def __init__(
        self,
        name: str,
        events: Optional[List[AstronomyEvent]] = None,
        error: Optional[Exception] = None,
    ):
        super().__init__(FakeHTTPClient(), LookupWindow())
        self._name = name
        self._events = list(events or [])
        self._error = error
        self.calls: List[str] = []

    def get_name(self) -> str:
        return self._name

    async def get_events(self, time_range: TimeRange) -> List[AstronomyEvent]:
        self.calls.append("get_events")
        if self._error is not None:
            raise self._error
        return [
            e for e in self._events
            if e.start_time is not None and time_range.start < e.start_time < time_range.end
        ]

    async def get_event_by_id(self, event_id: str) -> Optional[AstronomyEvent]:
        self.calls.append("get_event_by_id")
        if self._error is not None:
            raise self._error
        for event in self._events:
            if event.event_id == event_id:
                return event
        return None


@pytest.fixture
def fake_http_client():
    """Provide a factory for canned HTTP clients."""
    return FakeHTTPClient


@pytest.fixture
def stub_provider():
    """Provide a factory for in-memory providers."""
    return StubProvider


@pytest.fixture
def now():
    """A fixed, timezone-aware reference time."""
    return datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_event(now):
    """Provide a factory for events starting relative to ``now``."""

    def _make(
        event_id: str,
        event_type: AstronomyEventType = AstronomyEventType.OTHER,
        offset: timedelta = timedelta(hours=1),
        duration: Optional[timedelta] = timedelta(hours=24),
        source: str = "Stub",
    ) -> AstronomyEvent:
        start = now + offset
        return AstronomyEvent(
            event_id=event_id,
            title=f"Event {event_id}",
            description=f"Description of {event_id}",
            start_time=start,
            end_time=start + duration if duration is not None else None,
            event_type=event_type,
            source=source,
        )

    return _make


@pytest.fixture
def donki_payload():
    """Two CME records as returned by NASA DONKI."""
    return [
        {
            "activityID": "2024-03-01T14:30:00-CME-001",
            "catalog": "M2M_CATALOG",
            "startTime": "2024-03-01T14:30Z",
            "sourceLocation": "N20E15",
            "activeRegionNum": 13590,
            "note": "Faint CME seen in LASCO C2.",
            "instruments": [{"displayName": "SOHO: LASCO/C2"}],
        },
        {
            "activityID": "2024-03-02T08:12:00-CME-001",
            "catalog": "M2M_CATALOG",
            "startTime": "2024-03-02T08:12Z",
            "sourceLocation": "",
            "note": "",
        },
    ]


@pytest.fixture
def planets_payload():
    """Visible planets response for two bodies."""
    return {
        "meta": {"time": "2024-03-10T12:00:00Z"},
        "data": [
            {
                "name": "Mars",
                "constellation": "Capricornus",
                "altitude": 12.3456,
                "azimuth": 120.0,
                "nakedEyeObject": True,
            },
            {
                "name": "Jupiter",
                "constellation": "Aries",
                "altitude": 45.0,
                "azimuth": 250.556,
            },
        ],
    }
