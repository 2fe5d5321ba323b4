"""
Headline acquisition: the HTTP fetcher for the news endpoint and the cache
snapshot used as an offline fallback.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from newsticker.cache_manager import CacheManager
from newsticker.exceptions import CacheError, FetchError
from newsticker.logging_config import get_logger
from newsticker.models import (
    CacheSnapshot, DEFAULT_SERVICE, Headline, SNAPSHOT_CACHE_KEY, now_ms,
)


class HeadlineFetcher:
    """Fetches headline lists from the news endpoint."""

    def __init__(self, endpoint: str, timeout: float = 10.0,
                 session: Optional[requests.Session] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.logger = logger or get_logger(__name__)
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'NewsTicker/1.0',
            'Accept': 'application/json',
        })

    def build_params(self, service: Optional[str], query: Optional[str] = None) -> Dict[str, str]:
        """Query parameters for a request; the default service needs none."""
        params = {}
        if service and service != DEFAULT_SERVICE:
            params['service'] = service
        if query:
            params['q'] = query
        return params

    def fetch(self, service: Optional[str] = None, query: Optional[str] = None) -> List[Headline]:
        """
        Fetch headlines for a service.

        Args:
            service: Service identifier (sports, local, news, weather, tweets)
            query: Optional case-insensitive substring filter

        Returns:
            Headlines in the order returned by the endpoint

        Raises:
            FetchError: On transport failure, non-2xx status or a malformed body
        """
        params = self.build_params(service, query)
        try:
            response = self.session.get(self.endpoint, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request failed: {e}", url=self.endpoint) from e

        if not response.ok:
            raise FetchError(f"HTTP {response.status_code}", url=response.url or self.endpoint,
                             status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError("Response body is not valid JSON", url=response.url or self.endpoint) from e

        if not isinstance(payload, list):
            raise FetchError(f"Expected a JSON array, got {type(payload).__name__}",
                             url=response.url or self.endpoint)

        received_at = now_ms()
        headlines = [Headline.from_dict(item, default_ts=received_at) for item in payload]
        self.logger.debug("Fetched %d headlines from %s", len(headlines), response.url or self.endpoint)
        return headlines

    def close(self) -> None:
        self.session.close()


class SnapshotStore:
    """
    The single named cache entry holding the last rendered headline set.

    A snapshot is usable only while it is younger than ``max_age_ms``; older,
    missing or unreadable snapshots are all reported as absent.
    """

    def __init__(self, cache_manager: CacheManager, key: str = SNAPSHOT_CACHE_KEY,
                 max_age_ms: int = 3600000, clock: Callable[[], int] = now_ms,
                 logger: Optional[logging.Logger] = None) -> None:
        self.cache_manager = cache_manager
        self.key = key
        self.max_age_ms = max_age_ms
        self.clock = clock
        self.logger = logger or get_logger(__name__)

    def save(self, headlines: List[Headline]) -> bool:
        """Persist the headlines with the current time; failures are logged, never raised."""
        snapshot = CacheSnapshot(headlines=list(headlines), timestamp=self.clock())
        try:
            return bool(self.cache_manager.save_cache(self.key, snapshot.to_dict()))
        except (CacheError, OSError, TypeError, ValueError) as e:
            self.logger.warning("Failed to save headlines to cache: %s", e)
            return False

    def load(self) -> Optional[List[Headline]]:
        """Return cached headlines if a fresh snapshot exists, else None."""
        try:
            record: Any = self.cache_manager.get_cached_data(self.key)
        except (CacheError, OSError, ValueError) as e:
            self.logger.warning("Failed to load cached headlines: %s", e)
            return None

        if not record:
            return None

        try:
            snapshot = CacheSnapshot.from_dict(record)
        except (FetchError, KeyError, TypeError, ValueError, OverflowError, AttributeError) as e:
            self.logger.warning("Ignoring corrupt headline snapshot: %s", e)
            return None

        now = self.clock()
        if not snapshot.is_fresh(now, self.max_age_ms):
            self.logger.info("Cached headlines are stale (%d minutes old), ignoring",
                             snapshot.age_ms(now) // 60000)
            return None

        return snapshot.headlines
