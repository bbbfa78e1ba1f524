"""
Time helpers shared by the providers, the REST boundary and the display client.

All timestamps crossing the REST boundary are RFC 3339 strings. Calendar
month arithmetic follows dateutil's relativedelta, which clamps to the last
day of a shorter month.
"""

import re
from datetime import datetime, timedelta
from typing import Optional

from dateutil.relativedelta import relativedelta

# RFC 3339 date-time: mandatory seconds and offset, optional fraction.
_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$"
)

DATE_FORMAT = "%Y-%m-%d"


def parse_rfc3339(value: str) -> datetime:
    """
    Parse a strict RFC 3339 timestamp.

    Args:
        value: Timestamp such as ``2024-03-01T14:30:00Z``

    Returns:
        datetime: Timezone-aware datetime

    Raises:
        ValueError: If the value is not RFC 3339
    """
    if not _RFC3339_PATTERN.match(value):
        raise ValueError(f"Not an RFC 3339 timestamp: {value!r}")

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    if "." in normalized:
        # fromisoformat only accepts up to six fractional digits before 3.11
        head, rest = normalized.split(".", 1)
        fraction, offset = rest[:-6], rest[-6:]
        normalized = f"{head}.{fraction[:6].ljust(6, '0')}{offset}"
    return datetime.fromisoformat(normalized)


def format_rfc3339(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as RFC 3339, ``None`` stays ``None``."""
    if value is None:
        return None
    if value.tzinfo is not None and value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()


def format_date(value: datetime) -> str:
    """Format the calendar date of a datetime as ``YYYY-MM-DD``."""
    return value.strftime(DATE_FORMAT)


def add_months(value: datetime, months: int) -> datetime:
    """Shift a datetime by whole calendar months."""
    return value + relativedelta(months=months)


def start_of_day(value: datetime) -> datetime:
    """Midnight of the given datetime's date, keeping its timezone."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def local_now() -> datetime:
    """Current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()
