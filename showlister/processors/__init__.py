from .normalizer import normalize_events, normalize_ticketmaster, normalize_eventbrite, pick_best_image
from .deduplicator import deduplicate_events, completeness_score
from .geo_filter import filter_metro_events, is_metro_event, is_in_state, haversine_miles
from .date_filter import filter_event_window
from .sorting import sort_events, date_time_key
from .pipeline import process_events

__all__ = [
    "normalize_events", "normalize_ticketmaster", "normalize_eventbrite", "pick_best_image",
    "deduplicate_events", "completeness_score",
    "filter_metro_events", "is_metro_event", "is_in_state", "haversine_miles",
    "filter_event_window",
    "sort_events", "date_time_key",
    "process_events",
]
