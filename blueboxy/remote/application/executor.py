"""CachedRetryExecutor — runs one logical remote call with caching and retry."""

import asyncio
from collections.abc import Awaitable, Callable

from blueboxy.cache.domain.clock import Clock
from blueboxy.cache.domain.entry import CacheEntry, approximate_size
from blueboxy.cache.domain.status import CacheStatus
from blueboxy.cache.domain.store import CacheStore
from blueboxy.remote.domain.classifier import classify
from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError
from blueboxy.remote.domain.observer import ExecutorObserver
from blueboxy.remote.domain.result import Failure, RemoteCallResult, Success
from blueboxy.retry.domain.attempt import Attempt
from blueboxy.retry.domain.policy import RetryPolicy


class CachedRetryExecutor:
    """Wraps unreliable async operations with a TTL cache and a retry policy.

    Constructed once by the composition root and handed to every caller that
    needs it. The executor owns the keyspace of ``store``; it performs no I/O
    of its own and reports what happens through ``observer``.
    """

    def __init__(
        self,
        store: CacheStore,
        clock: Clock,
        observer: ExecutorObserver,
    ) -> None:
        self._store = store
        self._clock = clock
        self._observer = observer

    async def execute[T](
        self,
        key: str,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy,
        ttl_seconds: float,
        *,
        refresh: bool = False,
    ) -> RemoteCallResult[T]:
        """Return the cached value for key or run operation until it settles.

        A valid entry is only served when ``ttl_seconds > 0``; zero forces a
        fresh call and skips the cache write. ``refresh`` bypasses the cache
        read but still stores a successful result. Attempts run strictly one
        after another. A failed call never touches an existing entry, so stale
        but valid data survives a failed refresh.

        Cancellation while awaiting the operation or the backoff delay ends
        the call at once with a CANCELLED failure.

        Raises:
            ValueError: if key is empty or ttl_seconds is negative.
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")

        if ttl_seconds > 0 and not refresh:
            entry = self._store.get(key)
            if entry is not None and entry.is_valid(self._clock.now()):
                self._observer.cache_hit(key=key)
                return Success(value=entry.value, attempts=0, from_cache=True)
            self._observer.cache_miss(key=key)

        attempt_number = 0
        while True:
            attempt_number += 1
            try:
                value = await operation()
            except asyncio.CancelledError:
                _consume_cancellation()
                return self._cancelled(key=key, attempt_number=attempt_number)
            except Exception as exc:
                error = classify(exc)
            else:
                if ttl_seconds > 0:
                    self._store.put(
                        CacheEntry(
                            key=key,
                            value=value,
                            written_at=self._clock.now(),
                            ttl_seconds=ttl_seconds,
                            size_bytes=approximate_size(value),
                        )
                    )
                self._observer.call_succeeded(key=key, attempts=attempt_number)
                return Success(value=value, attempts=attempt_number)

            if error.kind is ErrorKind.CANCELLED:
                return self._cancelled(
                    key=key, attempt_number=attempt_number, error=error
                )

            self._observer.attempt_failed(
                key=key, attempt=attempt_number, kind=error.kind, reason=error.reason
            )
            if not policy.should_retry(error, attempt_number):
                self._observer.call_failed(
                    key=key, attempts=attempt_number, kind=error.kind, reason=error.reason
                )
                return Failure(error=error, attempts=attempt_number)

            attempt = Attempt(
                number=attempt_number,
                error=error,
                delay_seconds=policy.delay_for(error, attempt_number),
            )
            self._observer.retry_scheduled(
                key=key, attempt=attempt.number, delay_seconds=attempt.delay_seconds
            )
            try:
                await asyncio.sleep(attempt.delay_seconds)
            except asyncio.CancelledError:
                _consume_cancellation()
                return self._cancelled(key=key, attempt_number=attempt_number)

    def invalidate(self, key: str) -> None:
        """Remove the entry for key, if any."""
        self._store.remove(key)
        self._observer.cache_invalidated(key=key)

    def clear(self) -> None:
        """Remove every entry."""
        self._store.clear()
        self._observer.cache_cleared()

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        return self._store.purge_expired(self._clock.now())

    def status(self) -> CacheStatus:
        """Approximate cache occupancy. Diagnostic only."""
        return CacheStatus.from_entries(self._store.entries(), now=self._clock.now())

    def _cancelled(
        self,
        key: str,
        attempt_number: int,
        error: RemoteCallError | None = None,
    ) -> Failure:
        self._observer.call_cancelled(key=key, attempt=attempt_number)
        return Failure(
            error=error
            or RemoteCallError(kind=ErrorKind.CANCELLED, reason="remote call cancelled"),
            attempts=attempt_number,
        )


def _consume_cancellation() -> None:
    # Only for a CancelledError the executor caught: the request is answered
    # with a result, so the task must not stay marked as cancelling.
    task = asyncio.current_task()
    if task is not None and task.cancelling():
        task.uncancel()
