"""
Embed the feed into the static listing page.

The page carries its data as two script statements:

    const EVENTS_DATA = [...];
    const LAST_UPDATED = "...";

Both are replaced in place on every run. The page script filters and sorts
EVENTS_DATA for the viewer. When the page has a <main id="chMain"> element,
its contents are also replaced with the default visible listing, so the
page shows the right shows before any script runs.
"""

from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Union
import json
import logging
import re

from ..models import Event
from ..exceptions import TemplateError
from ..config import TEMPLATE_PATH, INDEX_HTML_PATH
from ..presentation import DisplayConfig, visible_events, format_show_count
from .helpers import script_json
from .listing_generator import render_event_groups

logger = logging.getLogger(__name__)

# The data block always ends with "];" on its own line (or inline when empty),
# so a "];" inside a JSON string can't end the match early.
EVENTS_DATA_RE = re.compile(r"const EVENTS_DATA = \[.*?\];$", re.DOTALL | re.MULTILINE)
LAST_UPDATED_RE = re.compile(r'const LAST_UPDATED = "[^"]*";')
LISTING_RE = re.compile(r'(<main\b[^>]*\bid="chMain"[^>]*>).*?(</main>)', re.DOTALL)
EVENT_COUNT_RE = re.compile(r'(<span\b[^>]*\bid="chEventCount"[^>]*>)[^<]*(</span>)')


def embed_events(html: str, events: List[Event], updated_at: str) -> str:
    """Return html with both data statements replaced."""
    if not EVENTS_DATA_RE.search(html):
        raise TemplateError("Template has no 'const EVENTS_DATA = [...];' statement")
    if not LAST_UPDATED_RE.search(html):
        raise TemplateError("Template has no 'const LAST_UPDATED = \"...\";' statement")

    events_json = script_json([e.to_dict() for e in events])
    # Callables keep backslashes in the JSON from being read as group refs
    html = EVENTS_DATA_RE.sub(lambda _: f"const EVENTS_DATA = {events_json};", html, count=1)
    html = LAST_UPDATED_RE.sub(lambda _: f"const LAST_UPDATED = {json.dumps(updated_at)};", html, count=1)
    return html


def prerender_listing(html: str, events: List[Event], now: Union[date, datetime]) -> str:
    """
    Fill the page's listing element with the default view of events.

    Uses visible_events() with default options, so cancelled, past and
    beyond-horizon events never appear. Pages without the element are
    returned unchanged.
    """
    if not LISTING_RE.search(html):
        logger.debug("Template has no <main id=\"chMain\"> element; skipping pre-render")
        return html

    today = now.date() if isinstance(now, datetime) else now
    shown = visible_events(events, DisplayConfig(), now)
    cards = render_event_groups(shown, today)

    html = LISTING_RE.sub(lambda m: f"{m.group(1)}\n{cards}{m.group(2)}", html, count=1)
    html = EVENT_COUNT_RE.sub(lambda m: f"{m.group(1)}{format_show_count(len(shown))}{m.group(2)}", html, count=1)
    return html


def generate_page(
    events: List[Event],
    updated_at: str,
    template_path: str = TEMPLATE_PATH,
    output_path: str = INDEX_HTML_PATH,
    now: Optional[datetime] = None,
) -> Path:
    """
    Write the listing page with the feed embedded.

    Raises:
        TemplateError: if the template can't be read or written, or lacks
            either placeholder statement
    """
    try:
        html = Path(template_path).read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read template {template_path}: {e}") from e

    html = embed_events(html, events, updated_at)
    html = prerender_listing(html, events, now or datetime.now())

    try:
        Path(output_path).write_text(html, encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot write page {output_path}: {e}") from e

    logger.info(f"Wrote {output_path} with {len(events)} embedded events")
    return Path(output_path)
