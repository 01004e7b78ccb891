"""CacheStatus — read-only occupancy snapshot for diagnostic display."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from blueboxy.cache.domain.entry import CacheEntry


class CacheStatus(BaseModel, frozen=True):
    total_entries: int = Field(ge=0)
    valid_entries: int = Field(ge=0)
    expired_entries: int = Field(ge=0)
    approximate_size_bytes: int = Field(ge=0)

    @classmethod
    def from_entries(cls, entries: Iterable[CacheEntry], now: float) -> "CacheStatus":
        total = valid = size = 0
        for entry in entries:
            total += 1
            size += entry.size_bytes
            if entry.is_valid(now):
                valid += 1
        return cls(
            total_entries=total,
            valid_entries=valid,
            expired_entries=total - valid,
            approximate_size_bytes=size,
        )
