"""
Geographic filtering to the Houston metro area.
"""

from typing import List, Optional, Tuple
import logging
import math

from ..models import Event
from ..config import HOUSTON_LATLONG, HOUSTON_RADIUS_MILES, HOUSTON_STATE_CODE, GEO_STRATEGY

logger = logging.getLogger(__name__)

EARTH_RADIUS_MILES = 3958.8

GEO_STRATEGIES = ("radius", "query")


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points, in miles."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def _has_coordinates(event: Event) -> bool:
    return all(
        isinstance(v, (int, float)) and math.isfinite(v)
        for v in (event.latitude, event.longitude)
    )


def is_metro_event(
    event: Event,
    center: Tuple[float, float] = HOUSTON_LATLONG,
    radius_miles: float = HOUSTON_RADIUS_MILES,
) -> bool:
    """
    Check whether an event is inside the metro area.

    With coordinates the event must be within radius_miles of center
    (boundary included). Without them, fall back to the venue's city and
    state text.
    """
    if _has_coordinates(event):
        distance = haversine_miles(center[0], center[1], event.latitude, event.longitude)
        return distance <= radius_miles

    city = (event.city or "").lower()
    state = (event.state or "").lower()
    return "houston" in city and (state == "tx" or "texas" in state)


def is_in_state(event: Event, state_code: str = HOUSTON_STATE_CODE) -> bool:
    """Keep events in state_code, and every event whose state is unknown."""
    if not event.state:
        return True
    return event.state.strip().upper() == state_code.upper()


def filter_metro_events(events: List[Event], strategy: Optional[str] = None) -> List[Event]:
    """
    Restrict events to the metro area using one explicit strategy.

    - "radius": haversine distance from the metro center, text fallback
    - "query": geography was already applied by the provider query; only
      drop events that report a different state
    """
    strategy = strategy or GEO_STRATEGY
    if strategy == "radius":
        filtered = [e for e in events if is_metro_event(e)]
    elif strategy == "query":
        filtered = [e for e in events if is_in_state(e)]
    else:
        raise ValueError(f"Unknown geo strategy: {strategy!r} (expected one of {GEO_STRATEGIES})")

    logger.info(f"Geo filter ({strategy}): {len(events)} -> {len(filtered)} "
                f"(removed {len(events) - len(filtered)} out-of-area events)")

    return filtered
