"""
Display strings for event cards and listing headers.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from ..models import Event
from ..utils.date_utils import DAY_NAMES, add_days, parse_iso_date, parse_timestamp, sunday_weekday, to_date_str

MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def format_price(price_min: Optional[float], price_max: Optional[float], currency: str = "USD") -> str:
    """
    Format a price range for a card.

    Examples:
    - (None, None) -> "Price TBA"
    - (0, None)    -> "Free"
    - (15, 15)     -> "From $15"
    - (15, 25)     -> "From $15–$25"
    - (None, 40)   -> "Up to $40"
    """
    if price_min is None and price_max is None:
        return "Price TBA"
    if price_min == 0 and (price_max == 0 or price_max is None):
        return "Free"

    def fmt(value: float) -> str:
        if currency == "USD":
            return f"${value:.0f}"
        return f"{value:.0f} {currency}"

    if price_min is not None and price_max is not None and price_min != price_max:
        return f"From {fmt(price_min)}–{fmt(price_max)}"
    if price_min is not None:
        return f"From {fmt(price_min)}"
    return f"Up to {fmt(price_max)}"


def format_date_label(date_str: str, today: date) -> str:
    """
    Header label for a day's group of shows.

    "Tonight" and "Tomorrow" for the next two days, "This Friday — Mar 6"
    for the rest of this week, "Next Friday — Mar 13" for the week after,
    and a bare "Friday — Apr 3" beyond that.
    """
    if date_str == to_date_str(today):
        return "Tonight"
    if date_str == to_date_str(add_days(today, 1)):
        return "Tomorrow"

    d = parse_iso_date(date_str)
    if d is None:
        return date_str or "Unknown Date"

    diff = (d - today).days
    prefix = ""
    if 2 <= diff <= 6:
        prefix = "This "
    elif 7 <= diff <= 13:
        prefix = "Next "

    return f"{prefix}{DAY_NAMES[sunday_weekday(d)]} — {MONTH_ABBR[d.month - 1]} {d.day}"


def format_updated_at(timestamp: Optional[str]) -> str:
    """Format the feed timestamp as "Mar 1, 7:30 PM"; empty if unparseable."""
    dt = parse_timestamp(timestamp)
    if dt is None:
        return ""
    hour = dt.hour % 12 or 12
    ampm = "PM" if dt.hour >= 12 else "AM"
    return f"{MONTH_ABBR[dt.month - 1]} {dt.day}, {hour}:{dt.minute:02d} {ampm}"


def format_status(status: Optional[str]) -> str:
    """Turn "on_sale" into "on sale"."""
    return (status or "").replace("_", " ")


def format_show_count(count: int) -> str:
    return f"{count} show" if count == 1 else f"{count} shows"


def venue_options(events: List[Event]) -> List[str]:
    """Sorted unique venue names for the venue dropdown."""
    return sorted({e.venue for e in events if e.venue})


def group_by_date(events: List[Event]) -> List[Tuple[str, List[Event]]]:
    """
    Group already-sorted events under date headers.

    Groups come out in first-appearance order, so a non-date sort still
    shows each date once, where its first event sits.
    """
    groups: Dict[str, List[Event]] = {}
    for event in events:
        groups.setdefault(event.date or "Unknown Date", []).append(event)
    return list(groups.items())
