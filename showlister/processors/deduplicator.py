"""
Event deduplication on the content id.
"""

from typing import Dict, List, Tuple
import logging

from ..models import Event

logger = logging.getLogger(__name__)


def completeness_score(event: Event) -> int:
    """Count how many of the nice-to-have fields an event carries.

    Used only to decide which of two duplicates survives.
    """
    return sum([
        bool(event.image_url),
        event.price_min is not None,
        bool(event.description),
        bool(event.ticket_url),
        bool(event.time),
    ])


def deduplicate_events(events: List[Event]) -> List[Event]:
    """
    Keep at most one event per id.

    The first event seen for an id holds its slot; a later duplicate
    replaces it only when its completeness score is strictly higher.
    Replacement is whole-record: fields are never merged across sources.
    """
    if not events:
        return []

    seen: Dict[str, Tuple[Event, int]] = {}

    for event in events:
        score = completeness_score(event)
        if event.id not in seen:
            seen[event.id] = (event, score)
            continue

        existing, existing_score = seen[event.id]
        if score > existing_score:
            logger.debug(f"Duplicate {event.id}: {event.source} (score {score}) replaces "
                         f"{existing.source} (score {existing_score})")
            seen[event.id] = (event, score)

    deduplicated = [event for event, _ in seen.values()]

    original_count = len(events)
    final_count = len(deduplicated)
    removed = original_count - final_count

    logger.info(f"Deduplication: {original_count} -> {final_count} (removed {removed} duplicates)")

    return deduplicated
