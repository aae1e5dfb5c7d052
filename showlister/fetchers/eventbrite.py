"""
Eventbrite API fetcher.
Eventbrite has no comedy search for Houston, so events come from the
listings of known comedy organizers.
"""

from typing import Dict, List, Optional
import logging

from ..config import (
    EVENTBRITE_TOKEN,
    EVENTBRITE_BASE_URL,
    EVENTBRITE_ORGANIZERS,
    MAX_PAGES,
)
from ..exceptions import FetchError
from ..models import Event
from ..processors.normalizer import normalize_events, normalize_eventbrite
from .base import BaseFetcher

logger = logging.getLogger(__name__)


class EventbriteFetcher(BaseFetcher):
    """Fetch live events from Eventbrite organizer listings."""

    def __init__(
        self,
        token: Optional[str] = None,
        organizers: Optional[List[Dict[str, str]]] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.token = EVENTBRITE_TOKEN if token is None else token
        self.organizers = EVENTBRITE_ORGANIZERS if organizers is None else organizers

    @property
    def source_name(self) -> str:
        return "eventbrite"

    def fetch(self) -> List[Event]:
        """
        Fetch events from every configured organizer.

        Returns:
            List of Event objects
        """
        self._log_fetch_start()

        if not self.token:
            logger.warning("EVENTBRITE_TOKEN not set, skipping Eventbrite fetch")
            return []

        events: List[Event] = []
        for org in self.organizers:
            try:
                raw_events = self._fetch_organizer_events(org["id"])
            except FetchError as e:
                logger.error(f"[{self.source_name}] Failed for {org['name']}: {e}")
                continue

            org_events = normalize_events(
                raw_events,
                lambda raw: normalize_eventbrite(raw, organizer_name=org["name"]),
            )
            events.extend(org_events)
            logger.info(f"[{self.source_name}] {len(org_events)} events from {org['name']} ({org['id']})")

        self._log_fetch_complete(len(events))
        return events

    def _fetch_organizer_events(self, organizer_id: str) -> List[dict]:
        """Fetch raw events for one organizer, following pagination."""
        all_events = []

        headers = {
            "Authorization": f"Bearer {self.token}",
        }

        page = 1
        has_more = True

        while has_more and page <= MAX_PAGES:  # Guard against a pager that never ends
            params = {
                "status": "live",
                "order_by": "start_asc",
                "expand": "venue,ticket_availability",
                "page": page,
            }
            data = self._make_request(
                f"{EVENTBRITE_BASE_URL}/organizers/{organizer_id}/events/",
                params=params,
                headers=headers,
            )

            all_events.extend(data.get("events") or [])

            pagination = data.get("pagination") or {}
            has_more = bool(pagination.get("has_more_items", False))
            page += 1

        return all_events
