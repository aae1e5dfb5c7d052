"""
Run provider fetchers side by side.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List
import logging

from ..models import Event
from .base import BaseFetcher

logger = logging.getLogger(__name__)


def fetch_all(fetchers: List[BaseFetcher]) -> Dict[str, List[Event]]:
    """
    Fetch from every provider concurrently.

    Each fetcher owns its session and result list; results are only merged
    by the caller. A fetcher that blows up contributes no events.

    Returns:
        Mapping of source name to that source's events
    """
    results: Dict[str, List[Event]] = {}
    if not fetchers:
        return results

    with ThreadPoolExecutor(max_workers=len(fetchers)) as executor:
        futures = {f.source_name: executor.submit(f.fetch) for f in fetchers}
        for source, future in futures.items():
            try:
                results[source] = future.result()
            except Exception as e:
                logger.error(f"[{source}] Fetch failed: {e}")
                results[source] = []

    return results
