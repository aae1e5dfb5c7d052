"""
Canonical feed ordering.
"""

from typing import List, Tuple

from ..models import Event


def date_time_key(event: Event) -> Tuple[str, str]:
    """
    Sort key: ISO date, then the formatted time string.

    The time part compares "H:MM AM/PM" strings as text, so "10:30 AM"
    lands before "9:00 AM". Existing feed consumers depend on this order.
    """
    # TODO: switch the secondary key to minutes-since-midnight once the
    # listing page sorts the same way.
    return (event.date or "", event.time or "")


def sort_events(events: List[Event]) -> List[Event]:
    """Return events in feed order (stable)."""
    return sorted(events, key=date_time_key)
