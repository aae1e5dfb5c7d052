"""Tests for the feed file, the embedded page and the rendered listing."""
import json
import re
from datetime import date, datetime
from pathlib import Path

import pytest

from showlister.exceptions import TemplateError
from showlister.generators import (
    build_feed,
    embed_events,
    generate_listing,
    generate_page,
    load_feed,
    load_raw_events,
    prerender_listing,
    render_listing,
    save_raw_events,
    write_feed,
)
from showlister.generators.helpers import event_structured_data, render_card
from showlister.models import Feed
from showlister.presentation import DisplayConfig, visible_events

TEMPLATE = """<html><body>
<script>
const EVENTS_DATA = [];
const LAST_UPDATED = "";
render(EVENTS_DATA);
</script>
</body></html>
"""

NOW = datetime(2026, 3, 4, 7, 0, 0)


def embedded_events(html):
    match = re.search(r"const EVENTS_DATA = (\[.*?\]);$", html, re.DOTALL | re.MULTILINE)
    return json.loads(match.group(1).replace("<\\/", "</"))


class TestFeedFiles:
    """Test cases for the JSON files."""

    def test_feed_round_trip(self, tmp_path, make_event):
        events = [make_event(name="A", price_min=10.0), make_event(name="B", date="2026-03-05")]
        path = tmp_path / "events.json"

        write_feed(build_feed(events, now=NOW), str(path))
        data = json.loads(path.read_text(encoding="utf-8"))
        feed = load_feed(str(path))

        assert data["last_updated"] == "2026-03-04T07:00:00"
        assert data["total_events"] == 2
        assert list(data["events"][0])[0] == "id"
        assert [e.name for e in feed.events] == ["A", "B"]
        assert feed.events[0].price_min == 10.0
        assert feed.last_updated == "2026-03-04T07:00:00"

    def test_write_overwrites(self, tmp_path, make_event):
        path = tmp_path / "events.json"
        write_feed(build_feed([make_event(name="Old")], now=NOW), str(path))
        write_feed(build_feed([], now=NOW), str(path))

        assert load_feed(str(path)).events == []

    def test_raw_events_round_trip(self, tmp_path, make_event):
        path = tmp_path / "data" / "raw_events.json"
        save_raw_events([make_event(name="Raw")], str(path))

        events = load_raw_events(str(path))
        assert [e.name for e in events] == ["Raw"]
        assert events[0].id == make_event(name="Raw").id


class TestEmbedEvents:
    """Test cases for the static page placeholders."""

    def test_replaces_both_statements(self, make_event):
        html = embed_events(TEMPLATE, [make_event(name="Show")], "2026-03-04T07:00:00")

        assert [e["name"] for e in embedded_events(html)] == ["Show"]
        assert 'const LAST_UPDATED = "2026-03-04T07:00:00";' in html
        assert html.endswith("render(EVENTS_DATA);\n</script>\n</body></html>\n")

    def test_second_run_replaces_previous_data(self, make_event):
        first = embed_events(TEMPLATE, [make_event(name="One"), make_event(name="Two")], "first")
        second = embed_events(first, [make_event(name="Three")], "second")

        assert [e["name"] for e in embedded_events(second)] == ["Three"]
        assert second.count("const EVENTS_DATA") == 1
        assert 'const LAST_UPDATED = "second";' in second
        assert "One" not in second

    def test_escapes_script_close(self, make_event):
        html = embed_events(TEMPLATE, [make_event(name="</script><b>Gotcha")], "now")

        assert "</script><b>" not in html
        assert embedded_events(html)[0]["name"] == "</script><b>Gotcha"

    def test_backslashes_survive(self, make_event):
        html = embed_events(TEMPLATE, [make_event(name="Back\\slash \\1")], "now")
        assert embedded_events(html)[0]["name"] == "Back\\slash \\1"

    @pytest.mark.parametrize("template", [
        "<script>const LAST_UPDATED = \"\";</script>",
        "<script>const EVENTS_DATA = [];</script>",
    ])
    def test_missing_placeholder(self, template, make_event):
        with pytest.raises(TemplateError):
            embed_events(template, [make_event()], "now")


class TestGeneratePage:
    """Test cases for writing the static page."""

    def test_writes_output(self, tmp_path, make_event):
        template = tmp_path / "template.html"
        template.write_text(TEMPLATE, encoding="utf-8")
        output = tmp_path / "index.html"

        generate_page([make_event()], "2026-03-04T07:00:00", str(template), str(output))

        assert len(embedded_events(output.read_text(encoding="utf-8"))) == 1
        assert template.read_text(encoding="utf-8") == TEMPLATE

    def test_in_place_update(self, tmp_path, make_event):
        page = tmp_path / "index.html"
        page.write_text(TEMPLATE, encoding="utf-8")

        generate_page([make_event(name="A")], "one", str(page), str(page))
        generate_page([make_event(name="B")], "two", str(page), str(page))

        assert [e["name"] for e in embedded_events(page.read_text(encoding="utf-8"))] == ["B"]

    def test_missing_template(self, tmp_path, make_event):
        with pytest.raises(TemplateError):
            generate_page([make_event()], "now", str(tmp_path / "nope.html"), str(tmp_path / "out.html"))
        assert not (tmp_path / "out.html").exists()


PAGE_TEMPLATE = """<html><body>
<span class="event-count" id="chEventCount"></span>
<main class="ch-main" id="chMain">
<div class="loading">Loading shows...</div>
</main>
<script>
const EVENTS_DATA = [];
const LAST_UPDATED = "";
</script>
</body></html>
"""


def listing_section(html):
    return re.search(r'<main class="ch-main" id="chMain">(.*?)</main>', html, re.DOTALL).group(1)


class TestPrerenderListing:
    """Test cases for the listing written into the static page."""

    def events(self, make_event):
        return [
            make_event(name="Headliner"),
            make_event(name="Called Off", status="cancelled"),
            make_event(name="Last Night", date="2026-03-03"),
        ]

    def test_hides_cancelled_and_past(self, tmp_path, make_event):
        page = tmp_path / "index.html"
        page.write_text(PAGE_TEMPLATE, encoding="utf-8")

        generate_page(self.events(make_event), "2026-03-04T07:00:00", str(page), str(page), now=NOW)
        html = page.read_text(encoding="utf-8")
        listing = listing_section(html)

        assert "Headliner" in listing
        assert "Called Off" not in listing
        assert "Last Night" not in listing
        assert "Loading shows" not in listing
        assert '<span class="event-count" id="chEventCount">1 show</span>' in html
        assert len(embedded_events(html)) == 3

    def test_second_run_replaces_cards(self, make_event):
        html = prerender_listing(PAGE_TEMPLATE, [make_event(name="Old Show")], NOW)
        html = prerender_listing(html, [make_event(name="New Show")], NOW)

        listing = listing_section(html)
        assert "New Show" in listing
        assert "Old Show" not in listing
        assert html.count('id="chMain"') == 1

    def test_nothing_visible(self, make_event):
        html = prerender_listing(PAGE_TEMPLATE, [make_event(status="cancelled")], NOW)
        assert "No shows found" in listing_section(html)
        assert ">0 shows</span>" in html

    def test_page_without_listing_is_untouched(self, make_event):
        assert prerender_listing(TEMPLATE, [make_event()], NOW) == TEMPLATE

    def test_shipped_page_has_every_hook(self):
        html = (Path(__file__).parent.parent / "index.html").read_text(encoding="utf-8")

        assert embed_events(html, [], "now")
        assert 'id="chMain"' in html
        assert 'id="chEventCount"' in html
        for control in ("chTimeFilters", "chSortSelect", "chVenueFilter", "chSourceFilter"):
            assert f'id="{control}"' in html
        assert 'status === "cancelled"' in html


class TestRenderListing:
    """Test cases for the server-rendered listing."""

    def feed(self, make_event):
        return Feed(events=[
            make_event(name="Late Show", date="2026-03-05", time="9:00 PM", price_min=20.0,
                       ticket_url="https://tix/late"),
            make_event(name="Cancelled Show", status="cancelled"),
            make_event(name="Early Show", date="2026-03-04", time="7:00 PM", source="eventbrite"),
        ], last_updated="2026-03-04T07:00:00")

    def test_cards_follow_visible_order(self, make_event):
        feed = self.feed(make_event)
        config = DisplayConfig(sort="name")
        html = render_listing(feed, config, NOW)

        expected = [e.name for e in visible_events(feed.events, config, NOW)]
        rendered = re.findall(r'<h3 class="card-name">(.*?)</h3>', html)
        assert rendered == expected == ["Early Show", "Late Show"]
        assert "Cancelled Show" not in html

    def test_structured_data(self, make_event):
        html = render_listing(self.feed(make_event), DisplayConfig(), NOW)

        block = re.search(r'<script type="application/ld\+json">\n(.*?)\n</script>', html, re.DOTALL)
        data = json.loads(block.group(1))
        assert data["@context"] == "https://schema.org"
        assert [item["name"] for item in data["@graph"]] == ["Early Show", "Late Show"]
        assert data["@graph"][1]["startDate"] == "2026-03-05T21:00"
        assert data["@graph"][1]["offers"]["price"] == 20.0

    def test_headers_and_meta(self, make_event):
        html = render_listing(self.feed(make_event), DisplayConfig(theme="light"), NOW)

        assert "Tonight" in html
        assert "Tomorrow" in html
        assert "Updated Mar 4, 7:00 AM" in html
        assert '<body class="ch-theme-light">' in html

    def test_empty_listing(self):
        html = render_listing(Feed(events=[], last_updated=""), DisplayConfig(), NOW)

        assert "No shows found" in html
        assert "application/ld+json" not in html

    def test_optional_sections(self, make_event):
        config = DisplayConfig(show_hero=False, show_controls=False, show_footer=False)
        html = render_listing(self.feed(make_event), config, NOW)

        assert "ch-hero" not in html
        assert 'id="chControls"' not in html
        assert "ch-footer" not in html

    def test_active_filter_summary(self, make_event):
        config = DisplayConfig(time_bucket="weekend", max_price=25, show_open_mic=False)
        html = render_listing(self.feed(make_event), config, NOW)

        assert "This Weekend" in html
        assert "Up to $25" in html
        assert "No open mics" in html

    def test_generate_listing_writes_file(self, tmp_path, make_event):
        path = generate_listing(self.feed(make_event), DisplayConfig(), NOW, str(tmp_path / "out" / "listing.html"))
        assert "Early Show" in path.read_text(encoding="utf-8")


class TestCardsAndSchema:
    """Test cases for card and schema helpers."""

    def test_card_escapes_provider_text(self, make_event):
        card = render_card(make_event(name='<img src=x onerror="alert(1)">', venue="Tom & Jerry's"))

        assert "<img src=x" not in card
        assert "&lt;img src=x" in card
        assert "Tom &amp; Jerry&#x27;s" in card

    def test_card_badges_toggle(self, make_event):
        assert "card-status-badge" in render_card(make_event())
        assert "card-status-badge" not in render_card(make_event(), show_badges=False)

    def test_card_without_ticket_url(self, make_event):
        assert "Coming Soon" in render_card(make_event(ticket_url=None))

    def test_event_status_mapping(self, make_event):
        data = event_structured_data(make_event(status="postponed", time=None))

        assert data["eventStatus"] == "https://schema.org/EventPostponed"
        assert data["startDate"] == "2026-03-04"
        assert "offers" not in data

    def test_today_uses_date_not_clock(self, make_event):
        html = render_listing(Feed(events=[make_event()], last_updated=""), DisplayConfig(), date(2026, 3, 4))
        assert "Tonight" in html
