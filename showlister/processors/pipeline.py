"""
The processing chain from merged provider events to the feed order.
"""

from datetime import date
from typing import List, Optional
import logging

from ..models import Event
from ..config import EVENT_WINDOW_DAYS
from .geo_filter import filter_metro_events
from .date_filter import filter_event_window
from .deduplicator import deduplicate_events
from .sorting import sort_events

logger = logging.getLogger(__name__)


def process_events(
    events: List[Event],
    today: Optional[date] = None,
    days: int = EVENT_WINDOW_DAYS,
    geo_strategy: Optional[str] = None,
) -> List[Event]:
    """Geography, then date window, then dedup, then canonical sort."""
    local = filter_metro_events(events, strategy=geo_strategy)
    upcoming = filter_event_window(local, days=days, today=today)
    deduplicated = deduplicate_events(upcoming)
    ordered = sort_events(deduplicated)

    logger.info(f"Processed events: {len(events)} -> {len(ordered)}")
    return ordered
