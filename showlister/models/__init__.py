from .event import Event, Feed, make_event_id, EVENT_STATUSES

__all__ = ["Event", "Feed", "make_event_id", "EVENT_STATUSES"]
