"""
Generate the server-rendered listing page.

Cards are rendered into the HTML and the visible events are described as
JSON-LD, so crawlers see the full listing without running any script.
"""

from datetime import date, datetime
from html import escape
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..models import Event, Feed
from ..config import RENDER_HTML_PATH, SITE_TITLE, SITE_DESCRIPTION, SITE_URL
from ..presentation import (
    DisplayConfig, visible_events, format_date_label, format_updated_at,
    format_show_count, group_by_date
)
from .helpers import html_header, html_footer, render_card, listing_structured_data

logger = logging.getLogger(__name__)

BUCKET_LABELS = {
    "all": "All Shows",
    "today": "Today",
    "tomorrow": "Tomorrow",
    "weekend": "This Weekend",
    "week": "This Week",
    "month": "This Month",
}


def render_listing(feed: Feed, config: DisplayConfig, now: Union[date, datetime]) -> str:
    """Render the full listing page for one set of display options."""
    today = now.date() if isinstance(now, datetime) else now
    events = visible_events(feed.events, config, now)

    html = html_header(
        title=config.hero_title or SITE_TITLE,
        description=f"{SITE_DESCRIPTION}. {format_show_count(len(events))} coming up.",
        canonical_url=SITE_URL,
        theme=config.theme,
        structured_data=listing_structured_data(events),
    )

    if config.show_hero:
        updated = format_updated_at(feed.last_updated)
        html += f'''
<div class="ch-hero">
  <h1 class="ch-hero-title">{escape(config.hero_title or SITE_TITLE)}</h1>
  <p class="ch-hero-subtitle">{escape(SITE_DESCRIPTION)}</p>
  <div class="ch-hero-meta">
    <span class="event-count" id="chEventCount">{format_show_count(len(events))}</span>
    <span id="chUpdatedAt">{"Updated " + escape(updated) if updated else ""}</span>
  </div>
</div>
'''

    if config.show_controls:
        html += _active_filters(config)

    html += '<main class="ch-main" id="chMain">\n'
    html += render_event_groups(events, today, show_badges=config.show_badges)
    html += '</main>\n'
    html += html_footer(show_sources=config.show_footer)
    return html


def render_event_groups(events: List[Event], today: date, show_badges: bool = True) -> str:
    """Date-grouped cards for already visible events, or the empty state."""
    if not events:
        return ('<div class="empty-state"><h2>No shows found</h2>'
                '<p>Try changing your filters or check back later.</p></div>\n')

    html = ""
    for date_str, day_events in group_by_date(events):
        html += ('<section class="date-group"><div class="date-header">'
                 f'<span class="date-header-text">{escape(format_date_label(date_str, today))}</span>'
                 '<span class="date-header-line"></span>'
                 f'<span class="date-header-count">{format_show_count(len(day_events))}</span>'
                 '</div><div class="events-grid">\n')
        for event in day_events:
            html += render_card(event, show_badges=show_badges) + "\n"
        html += '</div></section>\n'
    return html


def _active_filters(config: DisplayConfig) -> str:
    """Summary line of the options this page was rendered with."""
    parts = [BUCKET_LABELS[config.time_bucket]]
    if config.venue != "all":
        parts.append(config.venue)
    if config.source != "all":
        parts.append(config.source.title())
    if config.max_price is not None:
        parts.append(f"Up to ${config.max_price:.0f}")
    if not config.show_open_mic:
        parts.append("No open mics")
    parts.append(f"Sorted by {config.sort}")

    items = " &middot; ".join(escape(p) for p in parts)
    return f'<div class="controls" id="chControls"><div class="controls-row">{items}</div></div>\n'


def generate_listing(
    feed: Feed,
    config: DisplayConfig,
    now: Optional[datetime] = None,
    output_path: str = RENDER_HTML_PATH,
) -> Path:
    """Render the listing and write it to output_path."""
    html = render_listing(feed, config, now or datetime.now())

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(html)

    logger.info(f"Wrote server-rendered listing to {path}")
    return path
