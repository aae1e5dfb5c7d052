"""
Date parsing and formatting utilities.
"""

from datetime import date, datetime, timedelta
from typing import Optional

from dateutil import parser as dateparser
from dateutil.relativedelta import relativedelta

# Sunday-first, matching the weekday numbering the listing page uses
DAY_NAMES = [
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
]


def parse_iso_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a "YYYY-MM-DD" string, returning None if it isn't one."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str[:10], "%Y-%m-%d").date()
    except (ValueError, TypeError):
        return None


def to_date_str(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def sunday_weekday(d: date) -> int:
    """Weekday number with Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def end_of_month(d: date) -> date:
    """Last calendar day of the month containing d."""
    return d + relativedelta(day=31)


def get_day_of_week(date_str: Optional[str]) -> Optional[str]:
    """
    Return the full weekday name for a venue-local date string.

    Works on the calendar date alone (no clock, no timezone), so a DST
    change or a UTC offset can't roll it into the neighbouring day.
    """
    d = parse_iso_date(date_str)
    if d is None:
        return None
    return DAY_NAMES[sunday_weekday(d)]


def format_time(time_str: Optional[str]) -> Optional[str]:
    """
    Convert a 24-hour "HH:MM" or "HH:MM:SS" string to "H:MM AM/PM".

    Examples:
    - "19:30:00" -> "7:30 PM"
    - "00:15"    -> "12:15 AM"
    - "12:00"    -> "12:00 PM"
    """
    if not time_str:
        return None

    parts = time_str.split(":")
    try:
        hour = int(parts[0])
    except ValueError:
        return None
    minutes = parts[1] if len(parts) > 1 and parts[1] else "00"

    ampm = "PM" if hour >= 12 else "AM"
    if hour == 0:
        hour = 12
    elif hour > 12:
        hour -= 12

    return f"{hour}:{minutes} {ampm}"


def to_24_hour(time_str: Optional[str]) -> Optional[str]:
    """Inverse of format_time: "7:30 PM" -> "19:30"."""
    if not time_str:
        return None
    try:
        return datetime.strptime(time_str.strip(), "%I:%M %p").strftime("%H:%M")
    except ValueError:
        return None


def parse_timestamp(ts: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp such as the feed's last_updated."""
    if not ts:
        return None
    try:
        return dateparser.isoparse(ts)
    except (ValueError, TypeError):
        return None
