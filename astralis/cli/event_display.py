"""
Terminal client printing upcoming astronomical events from an Astralis server.

Requests one month of events starting now and prints each one with a small
piece of ASCII art chosen by event type.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, TextIO

import aiohttp

from ..api.http_client import DEFAULT_TIMEOUT_SECONDS
from ..models.astronomy_data import AstronomyEvent, AstronomyEventType
from ..utils.time_utils import add_months, format_date, format_rfc3339, local_now

logger = logging.getLogger(__name__)

METEOR_SHOWER_ART = """
    *    *    *    *    *
  *   *   *   *   *   *
    *    *    *    *    *
 *   *   *   *   *   *
   *    *    *    *    *
"""

ECLIPSE_ART = """
      @@@@@@@@
    @@@@@@@@@@@@
  @@@@@@@@@@@@@@@@
 @@@@@@@@@@@@@@@@@@
@@@@@@@@@@@@@@@@@@@@
"""

DEFAULT_ART = "*    *    *\n"

SEPARATOR = "-" * 50


class EventFetchError(Exception):
    """Raised when events cannot be fetched from the API."""

    pass


async def fetch_upcoming_events(
    base_url: str, timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
) -> List[AstronomyEvent]:
    """
    Fetch one month of events, starting now, from the Astralis API.

    Raises:
        EventFetchError: On transport errors, non-200 status or a bad body
    """
    start = local_now()
    params = {
        "start": format_rfc3339(start),
        "end": format_rfc3339(add_months(start, 1)),
    }
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    try:
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(f"{base_url.rstrip('/')}/events", params=params) as response:
                if response.status != 200:
                    raise EventFetchError(
                        f"API returned error: {response.status} {response.reason}"
                    )
                payload = await response.json(content_type=None)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise EventFetchError(f"Error fetching events: {e}") from e
    except ValueError as e:
        raise EventFetchError(f"Error decoding response: {e}") from e

    try:
        return [AstronomyEvent.from_dict(item) for item in payload or []]
    except (ValueError, TypeError, AttributeError) as e:
        raise EventFetchError(f"Error decoding response: {e}") from e


def art_for(event_type: AstronomyEventType) -> str:
    if event_type == AstronomyEventType.METEOR_SHOWER:
        return METEOR_SHOWER_ART
    if event_type == AstronomyEventType.ECLIPSE:
        return ECLIPSE_ART
    return DEFAULT_ART


def render_events(events: List[AstronomyEvent], out: Optional[TextIO] = None) -> None:
    """Print events, or a notice when there are none."""
    out = out or sys.stdout
    for event in events:
        out.write(f"\n=== {event.title} ===\n")
        date = format_date(event.start_time) if event.start_time else "unknown"
        out.write(f"Date: {date}\n")
        out.write(f"Type: {event.event_type.value}\n")
        out.write(f"Description: {event.description}\n")
        out.write(art_for(event.event_type))
        out.write(SEPARATOR + "\n")

    if not events:
        out.write("No upcoming astronomical events found.\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="astralis-cli", description="Show upcoming astronomical events"
    )
    parser.add_argument(
        "--api", default="http://localhost:8080", help="Base URL of the Astralis API"
    )
    args = parser.parse_args(argv)

    try:
        events = asyncio.run(fetch_upcoming_events(args.api))
    except EventFetchError as e:
        print(e)
        return 1

    render_events(events)
    return 0


if __name__ == "__main__":
    sys.exit(main())
