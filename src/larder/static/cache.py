"""Memoized ETags for immutable resource bundles.

A bundle cannot change while the process runs, so an entry is computed
once per path and then kept for the lifetime of the cache: there is no
invalidation and no eviction. The cache is bounded by the number of
paths in the bundle.

Lookups are lock-free. Inserts take a lock so concurrent requests (on
worker threads or a free-threaded build) never corrupt the map. Two
concurrent misses for one path may both compute the digest; the first
insert wins and both callers get the same value.
"""

import hashlib
import threading
from collections.abc import Callable


def sha1_etag(data: bytes) -> str:
    """Quoted SHA-1 hex digest of *data*, usable as an ``ETag`` value."""
    return f'"{hashlib.sha1(data, usedforsecurity=False).hexdigest()}"'


class ETagCache:
    """Path → quoted ETag, computed on first use and never evicted."""

    __slots__ = ("_digest", "_entries", "_lock")

    def __init__(self, digest: Callable[[bytes], str] = sha1_etag) -> None:
        self._digest = digest
        self._entries: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> str | None:
        """Return the cached ETag for *path* without computing it."""
        return self._entries.get(path)

    def get_or_compute(self, path: str, data: bytes) -> str:
        """Return the ETag for *path*, digesting *data* on the first call only."""
        etag = self._entries.get(path)
        if etag is not None:
            return etag
        etag = self._digest(data)
        with self._lock:
            return self._entries.setdefault(path, etag)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)
