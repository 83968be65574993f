"""Date utilities for lana.

Pure functions for calendar keys, month ranges and timestamp parsing.
"""

import calendar
from datetime import date, datetime, timedelta, tzinfo

from lana.domain.models import DayKey, Month


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp as sent by the API.

    Args:
        value: Timestamp string (e.g., "2025-05-26T10:00:00Z").

    Returns:
        Parsed datetime (aware if the string carries an offset).

    Raises:
        ValueError: If the value is not a valid ISO timestamp.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid timestamp: {value!r}")
    return datetime.fromisoformat(value.strip())


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of a timestamp in local time.

    Aware datetimes are converted to ``tz`` (system local time when None);
    naive datetimes are taken as already local.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def day_key(day: date) -> DayKey:
    """Grouping key for a calendar day (YYYY-MM-DD, zero padded)."""
    return DayKey(f"{day.year:04d}-{day.month:02d}-{day.day:02d}")


def weekday_name(day: date) -> str:
    """Weekday name for a date in the current locale."""
    return calendar.day_name[day.weekday()]


def month_of(day: date) -> Month:
    """Month (YYYY-MM) a date falls in."""
    return Month(f"{day.year:04d}-{day.month:02d}")


def month_range(month: Month) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = dt.strftime("%Y-%m-01")
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = next_month.strftime("%Y-%m-%d")
    label = dt.strftime("%B %Y")
    return since, until, label


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day into the month's valid range."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(max(day, 1), last_day))


def parse_year_month(text: str) -> Month:
    """Normalize a typed YYYY-MM month (e.g., "2025-5" -> "2025-05").

    Raises:
        ValueError: If the text is not a year and month.
    """
    return month_of(datetime.strptime(text.strip(), "%Y-%m").date())
