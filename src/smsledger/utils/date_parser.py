"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from dateutil import parser as date_parser
from dateutil import tz


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2026-01-15", "15/01/2026", "2 Jan 2026") and
    the relative words "today", "yesterday" and "tomorrow". Slash dates are
    read day first, as the banks write them.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return _parse_absolute(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, zone: Optional[tzinfo] = None) -> datetime:
    """Parse a date or date-time string, attaching ``zone`` when naive.

    Args:
        value: ISO or day-first date/time string
        zone: Timezone for naive values (UTC when None)

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string cannot be parsed
    """
    try:
        parsed = _parse_absolute(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=zone or tz.UTC)
    return parsed


def parse_message_datetime(
    date_str: str,
    date_format: str,
    time_str: Optional[str],
    time_format: Optional[str],
    zone: tzinfo,
) -> datetime:
    """Build an aware datetime from the date/time tokens of a bank message.

    The time token is optional; a date without one is midnight local time.

    Raises:
        ValueError: If a token does not match its format
    """
    day = datetime.strptime(date_str, date_format).date()
    clock = time.min
    if time_str and time_format:
        clock = datetime.strptime(time_str, time_format).time()
    return datetime.combine(day, clock, tzinfo=zone)


def _parse_absolute(value: str) -> datetime:
    # ISO strings must not be read day first
    if len(value) >= 10 and value[4] == "-" and value[:4].isdigit():
        return date_parser.isoparse(value)
    return date_parser.parse(value, dayfirst=True)
