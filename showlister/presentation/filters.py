"""
Viewer-facing filtering and sorting of the feed.

Every rendered view (the generated page, the server-rendered listing)
goes through visible_events(), so given the same feed, options and "now"
they all show the same events in the same order.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Union
import logging

from ..config import EVENT_WINDOW_DAYS
from ..exceptions import ConfigError
from ..models import Event
from ..processors.sorting import date_time_key
from ..utils.date_utils import add_days, end_of_month, sunday_weekday, to_date_str

logger = logging.getLogger(__name__)

TIME_BUCKETS = ("all", "today", "tomorrow", "weekend", "week", "month")
SORT_ORDERS = ("date", "price-low", "price-high", "name")
THEMES = ("dark", "light")

# price-low puts events without a price after every priced one
NO_PRICE_SENTINEL = 9999

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class DisplayConfig:
    """Viewer options for one rendering of the listing."""

    time_bucket: str = "all"
    venue: str = "all"
    source: str = "all"
    max_price: Optional[float] = None
    show_open_mic: bool = True
    sort: str = "date"
    horizon_days: int = EVENT_WINDOW_DAYS

    # Cosmetic only, never consulted by the filters
    show_badges: bool = True
    theme: str = "dark"
    show_hero: bool = True
    show_controls: bool = True
    show_footer: bool = True
    hero_title: str = ""

    def __post_init__(self):
        if self.time_bucket not in TIME_BUCKETS:
            raise ConfigError(f"Unknown time bucket {self.time_bucket!r}; expected one of {TIME_BUCKETS}")
        if self.sort not in SORT_ORDERS:
            raise ConfigError(f"Unknown sort {self.sort!r}; expected one of {SORT_ORDERS}")
        if self.theme not in THEMES:
            raise ConfigError(f"Unknown theme {self.theme!r}; expected one of {THEMES}")
        if self.max_price is not None and self.max_price < 0:
            raise ConfigError(f"max_price must not be negative, got {self.max_price}")
        if self.horizon_days < 0:
            raise ConfigError(f"horizon_days must not be negative, got {self.horizon_days}")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "DisplayConfig":
        """
        Build a config from loosely typed options (CLI flags, shortcode-style
        attributes). Unrecognized keys are ignored; None values fall back to
        the defaults.
        """
        kwargs = {}

        for key in ("time_bucket", "venue", "source", "sort", "theme", "hero_title"):
            value = options.get(key)
            if value is not None:
                kwargs[key] = str(value).strip()

        for key in ("show_open_mic", "show_badges", "show_hero", "show_controls", "show_footer"):
            if options.get(key) is not None:
                kwargs[key] = _to_bool(key, options[key])

        if options.get("max_price") not in (None, ""):
            try:
                kwargs["max_price"] = float(options["max_price"])
            except (TypeError, ValueError):
                raise ConfigError(f"max_price must be a number, got {options['max_price']!r}")

        if options.get("horizon_days") is not None:
            try:
                kwargs["horizon_days"] = int(options["horizon_days"])
            except (TypeError, ValueError):
                raise ConfigError(f"horizon_days must be an integer, got {options['horizon_days']!r}")

        return cls(**kwargs)


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class TimeBuckets:
    """Date boundaries (ISO strings) for the relative time filters."""

    today: str
    tomorrow: str
    friday: str
    saturday: str
    sunday: str
    end_of_week: str
    end_of_month: str

    @classmethod
    def for_today(cls, today: date) -> "TimeBuckets":
        """
        Compute bucket boundaries with Sunday = 0 weekday numbering.

        On Sunday the weekend is yesterday (Saturday), today (Sunday) and
        the coming Friday; on Saturday it is yesterday, today and tomorrow.
        """
        dow = sunday_weekday(today)

        if dow == 0:
            saturday = add_days(today, -1)
            sunday = today
        elif dow == 6:
            saturday = today
            sunday = add_days(today, 1)
        else:
            saturday = add_days(today, 6 - dow)
            sunday = add_days(today, 7 - dow)

        if dow <= 5:
            friday = add_days(today, 5 - dow)
        else:
            friday = add_days(today, -1)

        return cls(
            today=to_date_str(today),
            tomorrow=to_date_str(add_days(today, 1)),
            friday=to_date_str(friday),
            saturday=to_date_str(saturday),
            sunday=to_date_str(sunday),
            end_of_week=to_date_str(add_days(today, 7 - dow)),
            end_of_month=to_date_str(end_of_month(today)),
        )

    def matches(self, bucket: str, event_date: str) -> bool:
        if bucket == "all":
            return True
        if bucket == "today":
            return event_date == self.today
        if bucket == "tomorrow":
            return event_date == self.tomorrow
        if bucket == "weekend":
            return event_date in (self.friday, self.saturday, self.sunday)
        if bucket == "week":
            return event_date <= self.end_of_week
        if bucket == "month":
            return event_date <= self.end_of_month
        raise ConfigError(f"Unknown time bucket {bucket!r}")


def _as_date(now: Union[date, datetime]) -> date:
    return now.date() if isinstance(now, datetime) else now


def _within_price(event: Event, max_price: Optional[float]) -> bool:
    if max_price is None:
        return True
    # No price or a zero price counts as free
    if not event.price_min:
        return True
    return event.price_min <= max_price


def filter_events(events: List[Event], config: DisplayConfig, now: Union[date, datetime]) -> List[Event]:
    """
    Apply the viewer's filters.

    Undated, past, cancelled and beyond-horizon events never show,
    whatever the options.
    """
    today = _as_date(now)
    buckets = TimeBuckets.for_today(today)
    max_date = to_date_str(add_days(today, config.horizon_days))

    visible = []
    for event in events:
        if not event.date or event.date < buckets.today or event.date > max_date:
            continue
        if event.is_cancelled:
            continue
        if not buckets.matches(config.time_bucket, event.date):
            continue
        if config.venue != "all" and event.venue != config.venue:
            continue
        if config.source != "all" and event.source != config.source:
            continue
        if not _within_price(event, config.max_price):
            continue
        if not config.show_open_mic and "open mic" in (event.name or "").lower():
            continue
        visible.append(event)

    return visible


def sort_for_display(events: List[Event], sort: str) -> List[Event]:
    """Order events for display. All orders are stable."""
    if sort == "date":
        return sorted(events, key=date_time_key)
    if sort == "price-low":
        return sorted(events, key=lambda e: NO_PRICE_SENTINEL if e.price_min is None else e.price_min)
    if sort == "price-high":
        return sorted(events, key=lambda e: e.price_max or 0, reverse=True)
    if sort == "name":
        return sorted(events, key=lambda e: e.name or "")
    raise ConfigError(f"Unknown sort {sort!r}")


def visible_events(events: List[Event], config: DisplayConfig, now: Union[date, datetime]) -> List[Event]:
    """Filter then sort: the list a viewer sees for these options."""
    shown = sort_for_display(filter_events(events, config, now), config.sort)
    logger.debug(f"Visible events ({config.time_bucket}, sort={config.sort}): {len(events)} -> {len(shown)}")
    return shown
