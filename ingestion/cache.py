"""
Result Cache - time-bounded in-memory cache of URL extraction results.

Entries are snapshots: the stored value is copied on write and on read, so
callers can never mutate what another caller will receive. A hit within the
TTL is returned verbatim, even if the page has since changed.
"""

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable

from .models import ExtractedMetadata

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: ExtractedMetadata
    stored_at: float


class ResultCache:
    """In-memory TTL cache with LRU eviction, keyed by exact URL string."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_size: int = 1024,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at >= self.ttl_seconds

    def get(self, key: str) -> ExtractedMetadata | None:
        """Return a copy of the cached value, or None on miss/expiry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                return None

            self._entries.move_to_end(key)
            return entry.value.snapshot()

    def set(self, key: str, value: ExtractedMetadata) -> None:
        """Store a snapshot, overwriting any previous entry for the key."""
        entry = CacheEntry(key=key, value=value.snapshot(), stored_at=self._clock())

        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)

            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted least recently used cache entry: {evicted}")

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def cleanup_expired(self) -> int:
        """Remove expired entries. Returns count of removed entries."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if self._is_expired(e, now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    @property
    def size(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
