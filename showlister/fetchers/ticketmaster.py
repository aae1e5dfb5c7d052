"""
Ticketmaster Discovery API fetcher.
"""

from typing import Dict, List, Optional
import logging

from ..config import (
    TICKETMASTER_API_KEY,
    TICKETMASTER_BASE_URL,
    HOUSTON_DMA,
    HOUSTON_LATLONG,
    HOUSTON_RADIUS_MILES,
    HOUSTON_STATE_CODE,
    GEO_STRATEGY,
    TICKETMASTER_VENUES,
    MAX_PAGES,
    PAGE_SIZE,
)
from ..exceptions import FetchError
from ..models import Event
from ..processors.normalizer import normalize_events, normalize_ticketmaster
from .base import BaseFetcher

logger = logging.getLogger(__name__)


class TicketmasterFetcher(BaseFetcher):
    """Fetch comedy events from the Ticketmaster Discovery API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        venues: Optional[List[Dict[str, str]]] = None,
        geo_strategy: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.api_key = TICKETMASTER_API_KEY if api_key is None else api_key
        self.venues = TICKETMASTER_VENUES if venues is None else venues
        self.geo_strategy = geo_strategy or GEO_STRATEGY

    @property
    def source_name(self) -> str:
        return "ticketmaster"

    def fetch(self) -> List[Event]:
        """
        Fetch comedy events: one area search plus one search per known venue.

        Returns:
            List of Event objects
        """
        self._log_fetch_start()

        if not self.api_key:
            logger.warning("TICKETMASTER_API_KEY not set, skipping Ticketmaster fetch")
            return []

        events: List[Event] = []
        seen_ids = set()

        try:
            raw_events = self._fetch_pages(self._area_params())
            for event in normalize_events(raw_events, normalize_ticketmaster):
                events.append(event)
                seen_ids.add(event.id)
            logger.info(f"[{self.source_name}] Found {len(events)} events from area search")
        except FetchError as e:
            self._log_fetch_error(e)

        for venue in self.venues:
            try:
                raw_events = self._fetch_pages(self._venue_params(venue["id"]))
            except FetchError as e:
                logger.error(f"[{self.source_name}] {venue['name']} search failed: {e}")
                continue

            added = 0
            for event in normalize_events(raw_events, normalize_ticketmaster):
                if event.id not in seen_ids:
                    events.append(event)
                    seen_ids.add(event.id)
                    added += 1
            logger.info(f"[{self.source_name}] +{added} events from {venue['name']}")

        self._log_fetch_complete(len(events))
        return events

    def _area_params(self) -> dict:
        params = {
            "apikey": self.api_key,
            "classificationName": "comedy",
            "size": PAGE_SIZE,
            "sort": "date,asc",
        }
        if self.geo_strategy == "query":
            params.update({
                "latlong": f"{HOUSTON_LATLONG[0]},{HOUSTON_LATLONG[1]}",
                "radius": HOUSTON_RADIUS_MILES,
                "unit": "miles",
                "stateCode": HOUSTON_STATE_CODE,
            })
        else:
            params["dmaId"] = HOUSTON_DMA
        return params

    def _venue_params(self, venue_id: str) -> dict:
        return {
            "apikey": self.api_key,
            "venueId": venue_id,
            "size": PAGE_SIZE,
            "sort": "date,asc",
        }

    def _fetch_pages(self, params: dict) -> List[dict]:
        """Fetch raw events page by page, stopping at MAX_PAGES."""
        all_events = []
        page = 0
        total_pages = 1

        while page < total_pages and page < MAX_PAGES:
            data = self._make_request(
                f"{TICKETMASTER_BASE_URL}/events.json",
                params={**params, "page": page},
            )

            all_events.extend(data.get("_embedded", {}).get("events", []))

            total_pages = data.get("page", {}).get("totalPages", 1)
            page += 1

        return all_events
