#!/usr/bin/env python3
"""
show-lister - Houston Comedy Listing Generator

CLI entry point for fetching, processing, and publishing comedy listings.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from showlister.config import (
    DATA_DIR, RAW_EVENTS_PATH, EVENTS_JSON_PATH, INDEX_HTML_PATH, TEMPLATE_PATH,
    RENDER_HTML_PATH, EVENT_WINDOW_DAYS, GEO_STRATEGY
)
from showlister.exceptions import ConfigError, TemplateError
from showlister.fetchers import TicketmasterFetcher, EventbriteFetcher, fetch_all
from showlister.generators import (
    build_feed, write_feed, load_feed, save_raw_events, load_raw_events,
    generate_page, generate_listing
)
from showlister.presentation import DisplayConfig, TIME_BUCKETS, SORT_ORDERS
from showlister.processors import process_events

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def setup_directories():
    """Ensure required directories exist."""
    Path(DATA_DIR).mkdir(parents=True, exist_ok=True)


def cmd_fetch(args):
    """Fetch events from both providers at once."""
    logger.info("Starting fetch from all sources...")

    results = fetch_all([
        TicketmasterFetcher(geo_strategy=args.geo_strategy),
        EventbriteFetcher(),
    ])

    all_events = []
    for source, events in results.items():
        logger.info(f"{source}: {len(events)} events")
        all_events.extend(events)

    logger.info(f"Total raw events fetched: {len(all_events)}")
    save_raw_events(all_events, RAW_EVENTS_PATH)

    return all_events


def cmd_process(args):
    """Filter, deduplicate and sort fetched events, then write the feed."""
    raw_path = Path(RAW_EVENTS_PATH)
    if not raw_path.exists():
        logger.error("No raw data found. Run 'fetch' first.")
        return None

    events = load_raw_events(RAW_EVENTS_PATH)
    logger.info(f"Loaded {len(events)} raw events")

    events = process_events(events, days=args.days, geo_strategy=args.geo_strategy)

    feed = build_feed(events)
    write_feed(feed, EVENTS_JSON_PATH)
    return feed


def cmd_generate(args):
    """Embed the feed into the static page."""
    if not Path(EVENTS_JSON_PATH).exists():
        logger.error("No feed found. Run 'process' first.")
        return 1

    feed = load_feed(EVENTS_JSON_PATH)
    try:
        generate_page(feed.events, feed.last_updated, TEMPLATE_PATH, INDEX_HTML_PATH)
    except TemplateError as e:
        # The feed file stays as written; the page picks it up at runtime
        logger.error(f"HTML generation failed: {e}")
        return 1
    return 0


def cmd_render(args):
    """Server-render the listing for one set of display options."""
    if not Path(EVENTS_JSON_PATH).exists():
        logger.error("No feed found. Run 'process' first.")
        return 1

    try:
        config = DisplayConfig.from_mapping({
            "time_bucket": args.when,
            "venue": args.venue,
            "source": args.source,
            "max_price": args.max_price,
            "show_open_mic": not args.hide_open_mic,
            "sort": args.sort,
            "horizon_days": args.days,
            "show_badges": not args.no_badges,
            "theme": args.theme,
            "hero_title": args.title,
        })
    except ConfigError as e:
        logger.error(f"Invalid display options: {e}")
        return 2

    feed = load_feed(EVENTS_JSON_PATH)
    generate_listing(feed, config, output_path=args.output)
    return 0


def cmd_all(args):
    """Run full pipeline: fetch, process, generate."""
    logger.info("=" * 60)
    logger.info("show-lister - Full Pipeline")
    logger.info(f"Started at {datetime.now().isoformat()}")
    logger.info("=" * 60)

    cmd_fetch(args)

    feed = cmd_process(args)
    if feed is None:
        logger.error("No events to process. Aborting.")
        return 1

    # A page failure is reported but doesn't undo the feed write
    cmd_generate(args)

    logger.info("=" * 60)
    logger.info("Pipeline complete!")
    logger.info(f"Finished at {datetime.now().isoformat()}")
    logger.info("=" * 60)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="show-lister - Houston Comedy Listing Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py all                        # Run full pipeline
  python main.py fetch                      # Only fetch data
  python main.py process                    # Only build events.json
  python main.py generate                   # Only rewrite index.html
  python main.py render --when weekend      # Server-render a filtered listing
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    geo_help = "Geographic filtering strategy (default: %(default)s)"

    fetch_parser = subparsers.add_parser("fetch", help="Fetch events from all sources")
    fetch_parser.add_argument("--geo-strategy", choices=["radius", "query"], default=GEO_STRATEGY, help=geo_help)

    process_parser = subparsers.add_parser("process", help="Filter, dedupe and sort into events.json")
    process_parser.add_argument("--geo-strategy", choices=["radius", "query"], default=GEO_STRATEGY, help=geo_help)
    process_parser.add_argument("--days", type=int, default=EVENT_WINDOW_DAYS, help="Days ahead to keep")

    subparsers.add_parser("generate", help="Embed events.json into index.html")

    render_parser = subparsers.add_parser("render", help="Server-render a filtered listing page")
    render_parser.add_argument("--when", choices=TIME_BUCKETS, default="all", help="Time bucket")
    render_parser.add_argument("--venue", default="all", help="Exact venue name, or 'all'")
    render_parser.add_argument("--source", choices=["all", "ticketmaster", "eventbrite"], default="all")
    render_parser.add_argument("--max-price", type=float, default=None, help="Price ceiling in dollars")
    render_parser.add_argument("--hide-open-mic", action="store_true", help="Leave out open mics")
    render_parser.add_argument("--sort", choices=SORT_ORDERS, default="date")
    render_parser.add_argument("--days", type=int, default=EVENT_WINDOW_DAYS, help="Days ahead to show")
    render_parser.add_argument("--no-badges", action="store_true", help="Hide source/status badges")
    render_parser.add_argument("--theme", choices=["dark", "light"], default="dark")
    render_parser.add_argument("--title", default="", help="Custom hero title")
    render_parser.add_argument("--output", default=RENDER_HTML_PATH, help="Output HTML file")

    all_parser = subparsers.add_parser("all", help="Run full pipeline: fetch, process, generate")
    all_parser.add_argument("--geo-strategy", choices=["radius", "query"], default=GEO_STRATEGY, help=geo_help)
    all_parser.add_argument("--days", type=int, default=EVENT_WINDOW_DAYS, help="Days ahead to keep")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    setup_directories()

    commands = {
        "fetch": cmd_fetch,
        "process": cmd_process,
        "generate": cmd_generate,
        "render": cmd_render,
        "all": cmd_all,
    }

    try:
        result = commands[args.command](args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1

    if args.command == "process":
        return 0 if result is not None else 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
