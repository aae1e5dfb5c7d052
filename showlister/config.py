"""
Configuration for the show-lister comedy event pipeline.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from .exceptions import ConfigError

load_dotenv()


def env_int(name: str, default: int) -> int:
    """Read an integer setting from the environment."""
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


# Project root directory (parent of showlister package)
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# API Configuration
TICKETMASTER_API_KEY = os.environ.get("TICKETMASTER_API_KEY", "")
TICKETMASTER_BASE_URL = "https://app.ticketmaster.com/discovery/v2"

EVENTBRITE_TOKEN = os.environ.get("EVENTBRITE_TOKEN", "")
EVENTBRITE_BASE_URL = "https://www.eventbriteapi.com/v3"

# Houston metro area - Ticketmaster DMA code 324
HOUSTON_DMA = "324"
HOUSTON_LATLONG = (29.7604, -95.3698)
HOUSTON_RADIUS_MILES = 100
HOUSTON_STATE_CODE = "TX"

# "radius": filter after fetching (haversine, city/state text fallback)
# "query": push latlong/radius/stateCode into the Ticketmaster query and
#          keep only a state-code post-filter
GEO_STRATEGY = os.environ.get("GEO_STRATEGY", "radius")

# How many days ahead to keep/display
EVENT_WINDOW_DAYS = env_int("EVENT_WINDOW_DAYS", 90)

# Ticketmaster venues searched by id in addition to the DMA search
TICKETMASTER_VENUES = [
    {"id": "KovZpZAJledA", "name": "Houston Improv"},
]

# Eventbrite organizers whose live events are listed
EVENTBRITE_ORGANIZERS = [
    {"id": "29979960920", "name": "The Riot Comedy Club"},
    {"id": "20138725138", "name": "The Secret Group"},
]

# HTTP behaviour
MAX_PAGES = 10
PAGE_SIZE = 200
REQUEST_TIMEOUT = 30
MAX_RETRIES = 3
RETRY_BACKOFF_SECONDS = 2
USER_AGENT = "show-lister/1.0 (Houston comedy listings)"

# Output configuration (relative to project root)
OUTPUT_DIR = str(PROJECT_ROOT)
DATA_DIR = str(PROJECT_ROOT / "data")
RAW_EVENTS_PATH = str(PROJECT_ROOT / "data" / "raw_events.json")
EVENTS_JSON_PATH = str(PROJECT_ROOT / "events.json")
INDEX_HTML_PATH = str(PROJECT_ROOT / "index.html")
# The page is rewritten in place, so the template is the page itself
TEMPLATE_PATH = os.environ.get("TEMPLATE_PATH", INDEX_HTML_PATH)
RENDER_HTML_PATH = str(PROJECT_ROOT / "listing.html")

# Site branding
SITE_NAME = "Comedy Houston"
SITE_TITLE = "Every Comedy Show in Houston"
SITE_DESCRIPTION = "Houston Improv, The Riot, Secret Group, Punch Line & more - updated daily"
SITE_URL = os.environ.get("SITE_URL", "https://comedyhouston.example.com")
