"""
Helper functions for HTML generation.
"""

from html import escape
from typing import Any, Dict, List, Optional
import json

from ..models import Event
from ..config import SITE_NAME, SITE_URL
from ..presentation.formatting import format_price, format_status
from ..utils.date_utils import to_24_hour

SCHEMA_EVENT_STATUS = {
    "cancelled": "https://schema.org/EventCancelled",
    "postponed": "https://schema.org/EventPostponed",
    "rescheduled": "https://schema.org/EventRescheduled",
}

SCHEMA_AVAILABILITY = {
    "on_sale": "https://schema.org/InStock",
    "off_sale": "https://schema.org/SoldOut",
}


def script_json(data) -> str:
    """JSON that is safe inside an inline <script> block."""
    return json.dumps(data, indent=2, ensure_ascii=False).replace("</", "<\\/")


def html_header(
    title: str,
    description: Optional[str] = None,
    canonical_url: Optional[str] = None,
    theme: str = "dark",
    structured_data: Optional[Dict[str, Any]] = None
) -> str:
    """Generate the page head with SEO meta tags and optional JSON-LD.

    Args:
        title: Page title
        description: Meta description for SEO
        canonical_url: Canonical URL for the page
        theme: "dark" or "light", set as a class on <body>
        structured_data: JSON-LD structured data dict for schema.org
    """
    meta_tags = '<meta charset="UTF-8">\n'
    meta_tags += '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'

    if description:
        meta_tags += f'<meta name="description" content="{escape(description)}">\n'

    if canonical_url:
        meta_tags += f'<link rel="canonical" href="{escape(canonical_url)}">\n'

    # Open Graph tags
    og_url = canonical_url or SITE_URL
    meta_tags += f'<meta property="og:title" content="{escape(title)}">\n'
    if description:
        meta_tags += f'<meta property="og:description" content="{escape(description)}">\n'
    meta_tags += '<meta property="og:type" content="website">\n'
    meta_tags += f'<meta property="og:url" content="{escape(og_url)}">\n'
    meta_tags += f'<meta property="og:site_name" content="{escape(SITE_NAME)}">\n'

    json_ld = ""
    if structured_data:
        json_ld = f'\n<script type="application/ld+json">\n{script_json(structured_data)}\n</script>\n'

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
{meta_tags}<title>{escape(title)}</title>{json_ld}
</head>
<body class="ch-theme-{escape(theme)}">
<div id="ch-app">
'''


def html_footer(show_sources: bool = True) -> str:
    """Generate the page footer."""
    sources = ""
    if show_sources:
        sources = '''
<div class="ch-footer">
  Updated automatically twice daily &middot; Data from
  <a href="https://www.ticketmaster.com" target="_blank" rel="noopener">Ticketmaster</a> &amp;
  <a href="https://www.eventbrite.com" target="_blank" rel="noopener">Eventbrite</a>
</div>'''
    return f'''{sources}
</div>
</body>
</html>
'''


def render_card(event: Event, show_badges: bool = True) -> str:
    """
    Render one event card.

    All feed text is HTML-escaped; it comes straight from provider APIs.
    """
    if event.image_url:
        image_html = f'<img src="{escape(event.image_url)}" alt="{escape(event.name)}" loading="lazy">'
    else:
        image_html = ('<div class="card-image-placeholder">'
                      '<span class="venue-icon">&#127908;</span>'
                      f'<span class="venue-label">{escape(event.venue)}</span></div>')

    badges = ""
    if show_badges:
        status = event.status or "unknown"
        badges = (f'<span class="card-source-badge {escape(event.source)}">{escape(event.source)}</span>'
                  f'<span class="card-status-badge {escape(status)}">{escape(format_status(status))}</span>')

    if event.ticket_url:
        ticket_html = (f'<a class="card-cta" href="{escape(event.ticket_url)}" target="_blank" rel="noopener">'
                       'Get Tickets <span class="arrow">&rarr;</span></a>')
    else:
        ticket_html = '<span class="card-cta card-cta-disabled">Coming Soon</span>'

    age_html = ""
    if event.age_restriction:
        age_html = f'<span class="separator"></span><span>{escape(event.age_restriction)}</span>'

    price = escape(format_price(event.price_min, event.price_max, event.currency))

    return (
        '<article class="event-card">'
        f'<div class="card-image">{image_html}{badges}</div>'
        '<div class="card-body">'
        '<div class="card-date-time">'
        f'<span>{escape(event.day_of_week or "")}</span>'
        '<span class="separator"></span>'
        f'<span>{escape(event.time or "TBA")}</span>'
        f'{age_html}'
        '</div>'
        f'<h3 class="card-name">{escape(event.name)}</h3>'
        f'<div class="card-venue">{escape(event.venue)}</div>'
        '<div class="card-footer">'
        f'<div class="card-price">{price}</div>'
        f'{ticket_html}'
        '</div></div></article>'
    )


def event_structured_data(event: Event) -> Dict[str, Any]:
    """schema.org ComedyEvent for one listing."""
    start_date = event.date or ""
    start_time = to_24_hour(event.time)
    if start_date and start_time:
        start_date = f"{start_date}T{start_time}"

    address = {"@type": "PostalAddress", "addressCountry": "US"}
    if event.city:
        address["addressLocality"] = event.city
    if event.state:
        address["addressRegion"] = event.state

    data: Dict[str, Any] = {
        "@type": "ComedyEvent",
        "name": event.name,
        "startDate": start_date,
        "eventStatus": SCHEMA_EVENT_STATUS.get(event.status, "https://schema.org/EventScheduled"),
        "eventAttendanceMode": "https://schema.org/OfflineEventAttendanceMode",
        "location": {
            "@type": "Place",
            "name": event.venue,
            "address": address,
        },
    }

    if event.image_url:
        data["image"] = [event.image_url]
    if event.description:
        data["description"] = event.description
    if event.ticket_url:
        data["url"] = event.ticket_url

    if event.price_min is not None or event.ticket_url:
        offer: Dict[str, Any] = {"@type": "Offer", "priceCurrency": event.currency}
        if event.price_min is not None:
            offer["price"] = event.price_min
        if event.ticket_url:
            offer["url"] = event.ticket_url
        if event.status in SCHEMA_AVAILABILITY:
            offer["availability"] = SCHEMA_AVAILABILITY[event.status]
        data["offers"] = offer

    return data


def listing_structured_data(events: List[Event]) -> Optional[Dict[str, Any]]:
    """JSON-LD document for a rendered listing, or None when it's empty."""
    if not events:
        return None
    return {
        "@context": "https://schema.org",
        "@graph": [event_structured_data(e) for e in events],
    }
