"""
REST handlers exposing the astronomy event service over HTTP.

Query timestamps are validated strictly (RFC 3339) before the service is
called. A missing ``start`` defaults to now and a missing ``end`` to one
calendar month after the start.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from aiohttp import web

from ..api.base_provider import EventProvider
from ..models.astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange
from ..services.event_service import AstronomyEventService, ProviderFailure
from ..utils.time_utils import DATE_FORMAT, add_months, local_now, parse_rfc3339

logger = logging.getLogger(__name__)


class InvalidQueryError(Exception):
    """Raised when a request parameter cannot be parsed."""

    pass


class EventHandler:
    """HTTP handlers for the ``/events`` routes."""

    def __init__(self, service: AstronomyEventService):
        self._service = service

    def register_routes(self, app: web.Application) -> None:
        app.router.add_get("/events", self.get_events)
        app.router.add_get("/events/type/{type}", self.get_events_by_type)
        app.router.add_get("/events/date/{date}", self.get_events_by_date)
        app.router.add_get("/events/{id}", self.get_event_by_id)
        app.router.add_get("/health", self.health)

    async def get_events(self, request: web.Request) -> web.Response:
        try:
            time_range = self._parse_time_range(request)
        except InvalidQueryError as e:
            raise web.HTTPBadRequest(text=str(e))

        failures: List[ProviderFailure] = []
        try:
            events = await self._service.get_upcoming_events(time_range, failures)
        except Exception:
            logger.exception("Failed to get upcoming events")
            raise web.HTTPInternalServerError(text="Internal server error")
        self._log_failures(failures)
        return self._events_response(events)

    async def get_event_by_id(self, request: web.Request) -> web.Response:
        event_id = request.match_info["id"]

        failures: List[ProviderFailure] = []
        try:
            event = await self._service.get_event_by_id(event_id, failures)
        except Exception:
            logger.exception(f"Failed to get event {event_id!r}")
            raise web.HTTPInternalServerError(text="Internal server error")
        self._log_failures(failures)

        if event is None:
            raise web.HTTPNotFound(text="Event not found")
        return web.json_response(event.to_dict())

    async def get_events_by_type(self, request: web.Request) -> web.Response:
        event_type = AstronomyEventType.from_value(request.match_info["type"])
        if event_type is None:
            raise web.HTTPBadRequest(text="Invalid event type")
        try:
            time_range = self._parse_time_range(request)
        except InvalidQueryError as e:
            raise web.HTTPBadRequest(text=str(e))

        failures: List[ProviderFailure] = []
        try:
            events = await self._service.get_events_by_type(event_type, time_range, failures)
        except Exception:
            logger.exception(f"Failed to get {event_type.value} events")
            raise web.HTTPInternalServerError(text="Internal server error")
        self._log_failures(failures)
        return self._events_response(events)

    async def get_events_by_date(self, request: web.Request) -> web.Response:
        try:
            day = datetime.strptime(request.match_info["date"], DATE_FORMAT)
        except ValueError:
            raise web.HTTPBadRequest(text="Invalid date format")

        # Midnight in the server's local timezone, with that date's UTC offset
        day = day.astimezone()

        failures: List[ProviderFailure] = []
        try:
            events = await self._service.get_events_by_date(day, failures)
        except Exception:
            logger.exception(f"Failed to get events for {day.date()}")
            raise web.HTTPInternalServerError(text="Internal server error")
        self._log_failures(failures)
        return self._events_response(events)

    async def health(self, request: web.Request) -> web.Response:
        return web.json_response({"status": "ok", "providers": self._service.provider_names})

    @staticmethod
    def _parse_time_range(request: web.Request) -> TimeRange:
        start = _parse_optional_timestamp(request.query.get("start"), "start")
        if start is None:
            start = local_now()

        end = _parse_optional_timestamp(request.query.get("end"), "end")
        if end is None:
            end = add_months(start, 1)

        return TimeRange(start=start, end=end)

    @staticmethod
    def _events_response(events: List[AstronomyEvent]) -> web.Response:
        return web.json_response([event.to_dict() for event in events])

    @staticmethod
    def _log_failures(failures: List[ProviderFailure]) -> None:
        for failure in failures:
            logger.warning(
                f"Provider {failure.provider_name} skipped in "
                f"{failure.operation}: {failure.error}"
            )


def _parse_optional_timestamp(value: Optional[str], name: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return parse_rfc3339(value)
    except ValueError as e:
        raise InvalidQueryError(f"Invalid {name} date format") from e


def create_app(
    service: AstronomyEventService, providers: Sequence[EventProvider] = ()
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        service: Aggregation service answering the requests
        providers: Providers whose HTTP sessions are closed on shutdown
    """
    app = web.Application()
    EventHandler(service).register_routes(app)

    async def shutdown_providers(_app: web.Application) -> None:
        for provider in providers:
            await provider.shutdown()
        logger.info("Providers shut down")

    app.on_cleanup.append(shutdown_providers)
    return app
