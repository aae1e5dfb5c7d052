from .base import BaseFetcher, RateLimitedError
from .ticketmaster import TicketmasterFetcher
from .eventbrite import EventbriteFetcher
from .runner import fetch_all

__all__ = [
    "BaseFetcher",
    "RateLimitedError",
    "TicketmasterFetcher",
    "EventbriteFetcher",
    "fetch_all",
]
