from .feed_generator import build_feed, write_feed, load_feed, save_raw_events, load_raw_events
from .page_generator import generate_page, embed_events, prerender_listing
from .listing_generator import render_listing, generate_listing

__all__ = [
    "build_feed",
    "write_feed",
    "load_feed",
    "save_raw_events",
    "load_raw_events",
    "generate_page",
    "embed_events",
    "prerender_listing",
    "render_listing",
    "generate_listing",
]
