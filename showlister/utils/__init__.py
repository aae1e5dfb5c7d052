from .date_utils import (
    parse_iso_date, to_date_str, add_days, sunday_weekday, end_of_month,
    get_day_of_week, format_time, to_24_hour, parse_timestamp
)

__all__ = [
    "parse_iso_date", "to_date_str", "add_days", "sunday_weekday", "end_of_month",
    "get_day_of_week", "format_time", "to_24_hour", "parse_timestamp"
]
