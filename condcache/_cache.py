from __future__ import annotations

import logging
from threading import Lock
from typing import Dict, Optional

from condcache._headers import (
    ETAG,
    IF_MODIFIED_SINCE,
    IF_NONE_MATCH,
    LAST_MODIFIED,
    VALIDATOR_HEADERS,
)
from condcache._models import CacheEntry, Response

__all__ = ("ConditionalCache",)

logger = logging.getLogger("condcache.cache")

NOT_MODIFIED = 304


class ConditionalCache:
    """
    In-memory store of validated responses, keyed by canonical URL.

    The cache is consulted twice per request: `headers_for` before the
    network call to build a conditional request, then `is_hit` / `save`
    once the server has answered. Entries never expire and are only
    removed by `clear`.

    A single lock guards the store, so one instance can be shared between
    threads and between tasks of an event loop.
    """

    def __init__(self) -> None:
        self._storage: Dict[str, CacheEntry] = {}
        self._lock = Lock()

    def lookup(self, url: str) -> Optional[CacheEntry]:
        """
        Returns the entry stored under exactly `url`, or None.
        """
        with self._lock:
            return self._storage.get(url)

    def is_hit(self, response: Response) -> bool:
        """
        Determines whether the stored body may be used in place of `response`.

        Only a 304 for a URL that has an entry counts as a hit. Everything
        else falls back to the body the server sent.
        """
        if response.status_code != NOT_MODIFIED:
            return False

        url = response.url
        hit = self.lookup(url) is not None

        if hit:
            logger.debug(f"Using the cached body for {url} since the server answered with 304.")
        else:
            logger.debug(f"Received 304 for {url} but nothing is cached for it.")
        return hit

    def save(self, response: Response) -> None:
        """
        Stores `response` if it carries an entity tag or a last-modified date.

        Responses without validators are silently ignored, and so are 304
        responses, whose empty body must never replace a cached one. A stored
        entry replaces whatever was previously cached for the same URL.
        """
        url = response.url

        if response.status_code == NOT_MODIFIED:
            logger.debug(f"Not caching the 304 response for {url} since it has no body of its own.")
            return

        if not any(name in response.headers for name in VALIDATOR_HEADERS):
            logger.debug(f"Not caching the response for {url} since it has neither ETag nor Last-Modified.")
            return

        entry = CacheEntry(
            url=url,
            headers=response.headers.copy(),
            body=response.body,
            request=response.request,
        )
        with self._lock:
            self._storage[url] = entry
        logger.debug(f"Storing the response for {url} in cache.")

    def headers_for(self, url: str) -> Dict[str, str]:
        """
        Builds the conditional headers for the next request to `url`.

        Validators are passed through verbatim; when both are present both
        headers are sent and the server decides.
        """
        entry = self.lookup(url)

        if entry is None:
            return {}

        headers: Dict[str, str] = {}

        etag = entry.headers.get(ETAG)
        if etag:
            headers[IF_NONE_MATCH] = etag

        last_modified = entry.headers.get(LAST_MODIFIED)
        if last_modified:
            headers[IF_MODIFIED_SINCE] = last_modified

        return headers

    def clear(self) -> None:
        with self._lock:
            self._storage = {}
        logger.debug("Cleared the cache.")

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._storage

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)
