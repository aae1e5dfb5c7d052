"""Shared fixtures and raw provider payloads."""
import copy

import pytest

from showlister.models import Event


TM_EVENT = {
    "name": "Live Laugh Show",
    "url": "https://www.ticketmaster.com/event/abc",
    "info": "Two drink minimum.",
    "dates": {
        "start": {"localDate": "2026-03-01", "localTime": "19:30:00"},
        "status": {"code": "onsale"},
    },
    "priceRanges": [{"min": 25.0, "max": 45.0, "currency": "USD"}],
    "images": [
        {"ratio": "4_3", "width": 2048, "url": "https://img.tm/4x3.jpg"},
        {"ratio": "16_9", "width": 640, "url": "https://img.tm/small.jpg"},
        {"ratio": "16_9", "width": 1024, "url": "https://img.tm/large.jpg"},
    ],
    "ageRestrictions": {"legalAgeEnforced": True},
    "_embedded": {
        "venues": [{
            "name": "Houston Improv",
            "city": {"name": "Houston"},
            "state": {"stateCode": "TX", "name": "Texas"},
            "location": {"latitude": "29.7363", "longitude": "-95.4650"},
        }],
    },
}

EB_EVENT = {
    "name": {"text": "Live Laugh Show"},
    "url": "https://www.eventbrite.com/e/live-laugh-show-123",
    "status": "live",
    "start": {"local": "2026-03-01T19:30:00"},
    "venue": {
        "name": "Houston Improv",
        "latitude": "29.7363",
        "longitude": "-95.4650",
        "address": {"city": "Houston", "region": "TX"},
    },
}


@pytest.fixture
def tm_event():
    return copy.deepcopy(TM_EVENT)


@pytest.fixture
def eb_event():
    return copy.deepcopy(EB_EVENT)


@pytest.fixture
def make_event():
    """Factory for Event objects with sensible defaults."""
    def _make(**overrides):
        fields = {
            "name": "Comedy Night",
            "venue": "Houston Improv",
            "source": "ticketmaster",
            "city": "Houston",
            "state": "TX",
            "date": "2026-03-04",
            "time": "8:00 PM",
            "status": "on_sale",
        }
        fields.update(overrides)
        return Event(**fields)
    return _make
