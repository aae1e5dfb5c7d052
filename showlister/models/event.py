"""
Comedy event data model.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional
import hashlib

from ..utils.date_utils import get_day_of_week

EVENT_STATUSES = ("on_sale", "off_sale", "cancelled", "postponed", "rescheduled", "unknown")


def make_event_id(name: Optional[str], date: Optional[str], venue: Optional[str]) -> str:
    """Build the content id used as the dedup key.

    Two events with the same trimmed, lowercased name and venue on the same
    date get the same id regardless of which provider they came from.
    """
    raw = f"{(name or '').lower().strip()}|{date or ''}|{(venue or '').lower().strip()}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:16]


@dataclass
class Event:
    """Represents a single comedy show in the unified feed schema."""

    name: str
    venue: str
    source: str  # "ticketmaster" or "eventbrite"

    # Optional fields
    city: Optional[str] = None
    state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    date: Optional[str] = None  # "2026-03-01", venue-local
    time: Optional[str] = None  # "7:30 PM"
    day_of_week: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    currency: str = "USD"
    ticket_url: Optional[str] = None
    image_url: Optional[str] = None
    age_restriction: Optional[str] = None
    status: str = "unknown"
    description: Optional[str] = None

    # Generated fields
    id: str = ""
    last_updated: str = field(default_factory=lambda: datetime.now().isoformat())

    def __post_init__(self):
        if not self.id:
            self.id = make_event_id(self.name, self.date, self.venue)
        if self.day_of_week is None and self.date:
            self.day_of_week = get_day_of_week(self.date)

    @property
    def is_cancelled(self) -> bool:
        return self.status == "cancelled"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        # Keep "id" first so the feed file reads naturally
        return {"id": data.pop("id"), **data}

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        """Create Event from a feed dictionary."""
        return cls(
            id=data.get("id", ""),
            name=data.get("name") or "Untitled Event",
            venue=data.get("venue") or "Unknown Venue",
            source=data.get("source", ""),
            city=data.get("city"),
            state=data.get("state"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            date=data.get("date"),
            time=data.get("time"),
            day_of_week=data.get("day_of_week"),
            price_min=data.get("price_min"),
            price_max=data.get("price_max"),
            currency=data.get("currency") or "USD",
            ticket_url=data.get("ticket_url"),
            image_url=data.get("image_url"),
            age_restriction=data.get("age_restriction"),
            status=data.get("status") or "unknown",
            description=data.get("description"),
            last_updated=data.get("last_updated") or datetime.now().isoformat(),
        )


@dataclass
class Feed:
    """The persisted collection of events plus its build timestamp."""

    events: List[Event]
    last_updated: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_events(self) -> int:
        return len(self.events)

    def to_dict(self) -> dict:
        return {
            "last_updated": self.last_updated,
            "total_events": self.total_events,
            "events": [e.to_dict() for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Feed":
        events = [Event.from_dict(e) for e in data.get("events", [])]
        return cls(events=events, last_updated=data.get("last_updated") or "")
