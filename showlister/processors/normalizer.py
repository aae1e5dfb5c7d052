"""
Normalization of raw provider events into the unified Event schema.

Provider payloads are untrusted: any nested field may be missing or of the
wrong type. Optional fields that don't have the expected shape become None
(or their default) instead of failing the whole record.
"""

from datetime import datetime
from typing import Callable, List, Optional
import logging
import math

from ..models import Event
from ..utils.date_utils import format_time, get_day_of_week

logger = logging.getLogger(__name__)

TICKETMASTER_STATUS_MAP = {
    "onsale": "on_sale",
    "offsale": "off_sale",
    "cancelled": "cancelled",
    "postponed": "postponed",
    "rescheduled": "rescheduled",
}


def normalize_events(raw_events: List[dict], normalize: Callable[[dict], Event]) -> List[Event]:
    """
    Normalize a batch of raw provider records.

    A record that isn't usable at all is logged and skipped; everything
    else yields exactly one Event.
    """
    normalized = []

    for raw in raw_events:
        try:
            normalized.append(normalize(raw))
        except (ValueError, AttributeError, TypeError) as e:
            logger.debug(f"Skipping unusable raw event: {e}")

    return normalized


def normalize_ticketmaster(raw: dict, now: Optional[datetime] = None) -> Event:
    """Convert one Ticketmaster Discovery API event into an Event."""
    if not isinstance(raw, dict):
        raise ValueError(f"expected a Ticketmaster event object, got {type(raw).__name__}")

    venue_data = _first_dict(_dig(raw, "_embedded", "venues"))

    venue = _text(venue_data.get("name")) or "Unknown Venue"
    city = _text(_dig(venue_data, "city", "name"))
    state = _text(_dig(venue_data, "state", "stateCode")) or _text(_dig(venue_data, "state", "name"))
    latitude = _to_float(_dig(venue_data, "location", "latitude"))
    longitude = _to_float(_dig(venue_data, "location", "longitude"))

    date_str = _text(_dig(raw, "dates", "start", "localDate"))
    time_str = _text(_dig(raw, "dates", "start", "localTime"))

    # Only the first price range is used
    price_range = _first_dict(raw.get("priceRanges"))
    price_min = _to_float(price_range.get("min"))
    price_max = _to_float(price_range.get("max"))
    currency = _text(price_range.get("currency")) or "USD"

    age_restriction = "18+" if _dig(raw, "ageRestrictions", "legalAgeEnforced") is True else None
    images = raw.get("images")

    return Event(
        # The id hashes this display name, so a nameless record hashes
        # "Untitled Event" where older feeds hashed an empty name.
        name=_text(raw.get("name")) or "Untitled Event",
        venue=venue,
        source="ticketmaster",
        city=city,
        state=state,
        latitude=latitude,
        longitude=longitude,
        date=date_str,
        time=format_time(time_str),
        day_of_week=get_day_of_week(date_str),
        price_min=price_min,
        price_max=price_max,
        currency=currency,
        ticket_url=_text(raw.get("url")),
        image_url=pick_best_image(images if isinstance(images, list) else []),
        age_restriction=age_restriction,
        status=map_ticketmaster_status(_dig(raw, "dates", "status", "code")),
        description=_text(raw.get("info")) or _text(raw.get("pleaseNote")),
        last_updated=_timestamp(now),
    )


def normalize_eventbrite(raw: dict, organizer_name: Optional[str] = None,
                         now: Optional[datetime] = None) -> Event:
    """Convert one Eventbrite organizer-listing event into an Event.

    The organizer name stands in for the venue when the event has no
    expanded venue.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"expected an Eventbrite event object, got {type(raw).__name__}")

    venue_data = raw.get("venue")
    if not isinstance(venue_data, dict):
        venue_data = {}
    venue = _text(venue_data.get("name")) or organizer_name or "Unknown Venue"

    # "2026-02-15T19:30:00"
    start_local = _text(_dig(raw, "start", "local")) or ""
    date_str = start_local[:10] or None
    time_raw = start_local[11:16] or None

    availability = raw.get("ticket_availability")
    price_min = _to_float(_dig(availability, "minimum_ticket_price", "major_value"))
    price_max = _to_float(_dig(availability, "maximum_ticket_price", "major_value"))
    currency = _text(_dig(availability, "minimum_ticket_price", "currency")) or "USD"

    image_url = _text(_dig(raw, "logo", "original", "url")) or _text(_dig(raw, "logo", "url"))

    raw_status = _text(raw.get("status"))
    status = "on_sale" if raw_status == "live" else (raw_status or "unknown")

    return Event(
        # See normalize_ticketmaster: the fallback name feeds the id
        name=_text(_dig(raw, "name", "text")) or "Untitled Event",
        venue=venue,
        source="eventbrite",
        city=_text(_dig(venue_data, "address", "city")),
        state=_text(_dig(venue_data, "address", "region")),
        latitude=_to_float(venue_data.get("latitude")),
        longitude=_to_float(venue_data.get("longitude")),
        date=date_str,
        time=format_time(time_raw),
        day_of_week=get_day_of_week(date_str),
        price_min=price_min,
        price_max=price_max,
        currency=currency,
        ticket_url=_text(raw.get("url")),
        image_url=image_url,
        age_restriction=None,
        status=status,
        description=_text(raw.get("summary")) or _text(_dig(raw, "description", "text")),
        last_updated=_timestamp(now),
    )


def map_ticketmaster_status(code: Optional[str]) -> str:
    if not isinstance(code, str):
        return "unknown"
    return TICKETMASTER_STATUS_MAP.get(code, "unknown")


def pick_best_image(images: List[dict]) -> Optional[str]:
    """
    Pick the image to show on the event card.

    16:9 variants are preferred; within the pool the widest wins. With no
    16:9 variant the whole list is the pool. Entries that aren't objects
    are ignored.
    """
    candidates = [i for i in images if isinstance(i, dict)]
    if not candidates:
        return None

    wide = [i for i in candidates if i.get("ratio") == "16_9"]
    pool = wide or candidates
    best = max(pool, key=lambda i: _to_float(i.get("width")) or 0)
    return _text(best.get("url"))


def _dig(data, *keys):
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _first_dict(items) -> dict:
    """First element of a list when it is an object, else an empty dict."""
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _text(value) -> Optional[str]:
    """Non-empty string or None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _to_float(value) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _timestamp(now: Optional[datetime]) -> str:
    return (now or datetime.now()).isoformat()
