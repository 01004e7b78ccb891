"""Clock port — the executor's only source of time for cache validity."""

from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Current time in seconds on a monotonic scale."""
        ...
