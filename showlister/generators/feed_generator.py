"""
Reading and writing the JSON event files.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional
import json
import logging

from ..models import Event, Feed
from ..config import EVENTS_JSON_PATH, RAW_EVENTS_PATH

logger = logging.getLogger(__name__)


def build_feed(events: List[Event], now: Optional[datetime] = None) -> Feed:
    return Feed(events=list(events), last_updated=(now or datetime.now()).isoformat())


def write_feed(feed: Feed, path: str = EVENTS_JSON_PATH) -> Path:
    """Overwrite the feed file with the full feed."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(feed.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info(f"Saved {feed.total_events} events to {output_path}")
    return output_path


def load_feed(path: str = EVENTS_JSON_PATH) -> Feed:
    with open(path, encoding="utf-8") as f:
        return Feed.from_dict(json.load(f))


def save_raw_events(events: List[Event], path: str = RAW_EVENTS_PATH) -> Path:
    """Save normalized, not yet filtered events between fetch and process."""
    raw_path = Path(path)
    raw_path.parent.mkdir(parents=True, exist_ok=True)

    with open(raw_path, "w", encoding="utf-8") as f:
        json.dump([e.to_dict() for e in events], f, indent=2, ensure_ascii=False)

    logger.info(f"Saved raw data to {raw_path}")
    return raw_path


def load_raw_events(path: str = RAW_EVENTS_PATH) -> List[Event]:
    with open(path, encoding="utf-8") as f:
        return [Event.from_dict(d) for d in json.load(f)]
