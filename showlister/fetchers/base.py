"""
Base fetcher class with common functionality.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging

from tenacity import (
    Retrying, stop_after_attempt, wait_incrementing, retry_if_exception_type, before_sleep_log
)
import requests

from ..config import MAX_RETRIES, RETRY_BACKOFF_SECONDS, REQUEST_TIMEOUT, USER_AGENT
from ..exceptions import FetchError
from ..models import Event

logger = logging.getLogger(__name__)


class RateLimitedError(FetchError):
    """The provider answered 429 Too Many Requests."""


RETRYABLE_ERRORS = (requests.ConnectionError, requests.Timeout, RateLimitedError)


class BaseFetcher(ABC):
    """Abstract base class for event data fetchers."""

    def __init__(
        self,
        max_retries: int = MAX_RETRIES,
        retry_backoff: float = RETRY_BACKOFF_SECONDS,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return the source name for logging and attribution."""
        pass

    @abstractmethod
    def fetch(self) -> List[Event]:
        """
        Fetch and normalize events from this source.

        Never raises: a failing provider returns an empty list.

        Returns:
            List of Event objects
        """
        pass

    def _make_request(self, url: str, params: Optional[dict] = None, headers: Optional[dict] = None) -> dict:
        """
        GET a JSON document, retrying rate limits and network failures.

        Retries wait linearly longer each time (backoff, 2x backoff, ...).

        Args:
            url: URL to request
            params: Query parameters
            headers: Extra request headers

        Returns:
            Decoded JSON body

        Raises:
            FetchError: on an HTTP error status, a non-JSON body, or once
                retries are exhausted
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_incrementing(start=self.retry_backoff, increment=self.retry_backoff),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            response = retrying(self._get, url, params, headers)
        except requests.RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"JSON parse error for {url}: {e}") from e

    def _get(self, url: str, params: Optional[dict], headers: Optional[dict]) -> requests.Response:
        response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        if response.status_code == 429:
            raise RateLimitedError(f"Rate limited by {url}")
        if response.status_code >= 400:
            raise FetchError(f"HTTP {response.status_code} for {url}: {response.text[:500]}")
        return response

    def _log_fetch_start(self):
        """Log fetch operation start."""
        logger.info(f"[{self.source_name}] Starting fetch...")

    def _log_fetch_complete(self, count: int):
        """Log fetch operation completion."""
        logger.info(f"[{self.source_name}] Fetched {count} events")

    def _log_fetch_error(self, error: Exception):
        """Log fetch operation error."""
        logger.error(f"[{self.source_name}] Fetch failed: {error}")
