"""
Date filtering to the forward listing window.
"""

from datetime import date
from typing import List, Optional
import logging

from ..models import Event
from ..config import EVENT_WINDOW_DAYS
from ..utils.date_utils import add_days, to_date_str

logger = logging.getLogger(__name__)


def filter_event_window(
    events: List[Event],
    days: int = EVENT_WINDOW_DAYS,
    today: Optional[date] = None,
) -> List[Event]:
    """
    Keep events dated from today through today + days, both inclusive.

    Today is the local calendar date, so the window doesn't move during a
    run. Events without a date can't be scheduled and are dropped.

    Args:
        events: Events to filter
        days: Horizon in days
        today: Override for the current date

    Returns:
        Events inside the window, in their original order
    """
    today = today or date.today()
    start = to_date_str(today)
    end = to_date_str(add_days(today, days))

    # ISO dates compare correctly as strings
    filtered = [e for e in events if e.date and start <= e.date <= end]

    original_count = len(events)
    final_count = len(filtered)
    removed = original_count - final_count

    logger.info(f"Date filter: {original_count} -> {final_count} "
                f"(removed {removed} events outside {start}..{end})")

    return filtered
