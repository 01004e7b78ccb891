"""CacheEntry value object — one stored result and its validity window."""

import sys
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cached result. Replaced wholesale, never partially updated."""

    key: str
    value: Any
    written_at: float
    ttl_seconds: float
    size_bytes: int = 0

    def age(self, now: float) -> float:
        return now - self.written_at

    def is_valid(self, now: float) -> bool:
        return self.age(now) < self.ttl_seconds


def approximate_size(value: Any) -> int:
    """Rough in-memory footprint of value, for diagnostics only."""
    size = sys.getsizeof(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        size += sum(sys.getsizeof(item) for item in value)
    elif isinstance(value, dict):
        size += sum(sys.getsizeof(k) + sys.getsizeof(v) for k, v in value.items())
    return size
