"""InMemoryCacheStore — process-local CacheStore guarded by a lock."""

import threading

from blueboxy.cache.domain.entry import CacheEntry


class InMemoryCacheStore:
    """Dict-backed CacheStore, safe to share between tasks and threads.

    Last write wins per key. When ``max_entries`` is set and a write pushes the
    store over it, the oldest-written fifth of the entries (at least one) is
    evicted.

    Does NOT inherit from CacheStore (structural typing via Protocol).
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[entry.key] = entry
            if self._max_entries is not None and len(self._entries) > self._max_entries:
                self._evict_oldest()

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entries(self) -> list[CacheEntry]:
        with self._lock:
            return list(self._entries.values())

    def purge_expired(self, now: float) -> int:
        """Drop every expired entry and return how many were removed."""
        with self._lock:
            expired = [k for k, e in self._entries.items() if not e.is_valid(now)]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict_oldest(self) -> None:
        # Caller holds the lock.
        count = max(1, len(self._entries) // 5)
        oldest = sorted(self._entries.values(), key=lambda e: e.written_at)[:count]
        for entry in oldest:
            del self._entries[entry.key]
