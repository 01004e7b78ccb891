"""CacheStore port — key/value storage of CacheEntry objects."""

from typing import Protocol

from blueboxy.cache.domain.entry import CacheEntry


class CacheStore(Protocol):
    """Structural interface satisfied by any cache store.

    Implementations must tolerate concurrent readers and writers. Each key is
    independent; no multi-key transactions are required.
    """

    def get(self, key: str) -> CacheEntry | None: ...

    def put(self, entry: CacheEntry) -> None: ...

    def remove(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def entries(self) -> list[CacheEntry]: ...

    def purge_expired(self, now: float) -> int: ...
