"""RetryStatisticsObserver — aggregates retry behaviour per operation."""

from collections import Counter
from dataclasses import dataclass, field

from blueboxy.remote.domain.error_kind import ErrorKind


@dataclass
class OperationStats:
    """Running totals for one operation. Cache hits are not requests."""

    total_requests: int = 0
    successes: int = 0
    first_attempt_successes: int = 0
    failures: int = 0
    cancellations: int = 0
    total_attempts: int = 0
    cache_hits: int = 0
    error_counts: Counter[ErrorKind] = field(default_factory=Counter)

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successes / self.total_requests

    @property
    def average_attempts(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_attempts / self.total_requests


def operation_of(key: str) -> str:
    """Operation name of a cache key built as ``<operation>:<params>``."""
    return key.split(":", 1)[0]


class RetryStatisticsObserver:
    """Keeps OperationStats keyed by operation name.

    Satisfies the ExecutorObserver protocol structurally. Not thread-safe;
    intended for a single event loop.
    """

    def __init__(self) -> None:
        self._stats: dict[str, OperationStats] = {}

    def stats_for(self, operation: str) -> OperationStats | None:
        return self._stats.get(operation)

    @property
    def all_stats(self) -> dict[str, OperationStats]:
        return dict(self._stats)

    def cache_hit(self, key: str) -> None:
        self._get(key).cache_hits += 1

    def cache_miss(self, key: str) -> None:
        pass

    def attempt_failed(
        self, key: str, attempt: int, kind: ErrorKind, reason: str
    ) -> None:
        pass

    def retry_scheduled(self, key: str, attempt: int, delay_seconds: float) -> None:
        pass

    def call_succeeded(self, key: str, attempts: int) -> None:
        stats = self._get(key)
        stats.total_requests += 1
        stats.successes += 1
        stats.total_attempts += attempts
        if attempts == 1:
            stats.first_attempt_successes += 1

    def call_failed(
        self, key: str, attempts: int, kind: ErrorKind, reason: str
    ) -> None:
        stats = self._get(key)
        stats.total_requests += 1
        stats.failures += 1
        stats.total_attempts += attempts
        stats.error_counts[kind] += 1

    def call_cancelled(self, key: str, attempt: int) -> None:
        stats = self._get(key)
        stats.total_requests += 1
        stats.cancellations += 1
        stats.total_attempts += attempt

    def cache_invalidated(self, key: str) -> None:
        pass

    def cache_cleared(self) -> None:
        pass

    def _get(self, key: str) -> OperationStats:
        return self._stats.setdefault(operation_of(key), OperationStats())
