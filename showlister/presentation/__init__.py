from .filters import (
    DisplayConfig, TimeBuckets, filter_events, sort_for_display, visible_events,
    TIME_BUCKETS, SORT_ORDERS
)
from .formatting import (
    format_price, format_date_label, format_updated_at, format_status,
    format_show_count, venue_options, group_by_date
)

__all__ = [
    "DisplayConfig", "TimeBuckets", "filter_events", "sort_for_display", "visible_events",
    "TIME_BUCKETS", "SORT_ORDERS",
    "format_price", "format_date_label", "format_updated_at", "format_status",
    "format_show_count", "venue_options", "group_by_date",
]
