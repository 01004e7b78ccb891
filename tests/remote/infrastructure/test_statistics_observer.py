"""Tests for RetryStatisticsObserver aggregation."""

import pytest

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.infrastructure.statistics_observer import (
    OperationStats,
    RetryStatisticsObserver,
    operation_of,
)


class TestOperationOf:
    def test_takes_prefix_before_first_colon(self) -> None:
        assert operation_of("messages.generate:abc:def") == "messages.generate"

    def test_key_without_colon_is_its_own_operation(self) -> None:
        assert operation_of("ping") == "ping"


class TestOperationStats:
    def test_empty_stats_have_zero_rates(self) -> None:
        stats = OperationStats()

        assert stats.success_rate == 0.0
        assert stats.average_attempts == 0.0


class TestRetryStatisticsObserver:
    def test_unknown_operation_has_no_stats(self) -> None:
        assert RetryStatisticsObserver().stats_for("nothing") is None

    def test_aggregates_outcomes_per_operation(self) -> None:
        observer = RetryStatisticsObserver()
        observer.call_succeeded(key="messages.generate:1", attempts=1)
        observer.call_succeeded(key="messages.generate:2", attempts=3)
        observer.call_failed(
            key="messages.generate:3",
            attempts=2,
            kind=ErrorKind.SERVER_ERROR,
            reason="down",
        )
        observer.call_cancelled(key="messages.generate:4", attempt=1)

        stats = observer.stats_for("messages.generate")

        assert stats is not None
        assert stats.total_requests == 4
        assert stats.successes == 2
        assert stats.first_attempt_successes == 1
        assert stats.failures == 1
        assert stats.cancellations == 1
        assert stats.total_attempts == 7
        assert stats.success_rate == pytest.approx(0.5)
        assert stats.average_attempts == pytest.approx(1.75)
        assert stats.error_counts[ErrorKind.SERVER_ERROR] == 1

    def test_cache_hits_are_not_requests(self) -> None:
        observer = RetryStatisticsObserver()
        observer.cache_hit(key="messages.categories:x")
        observer.cache_hit(key="messages.categories:x")

        stats = observer.stats_for("messages.categories")

        assert stats is not None
        assert stats.cache_hits == 2
        assert stats.total_requests == 0

    def test_operations_are_tracked_separately(self) -> None:
        observer = RetryStatisticsObserver()
        observer.call_succeeded(key="a:1", attempts=1)
        observer.call_succeeded(key="b:1", attempts=1)

        assert set(observer.all_stats) == {"a", "b"}

    def test_non_terminal_events_change_nothing(self) -> None:
        observer = RetryStatisticsObserver()
        observer.cache_miss(key="a:1")
        observer.attempt_failed(key="a:1", attempt=1, kind=ErrorKind.UNKNOWN, reason="x")
        observer.retry_scheduled(key="a:1", attempt=1, delay_seconds=0.1)
        observer.cache_invalidated(key="a:1")
        observer.cache_cleared()

        assert observer.all_stats == {}
