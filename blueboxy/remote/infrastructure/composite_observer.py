"""CompositeExecutorObserver — fans out all events to a list of observers."""

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.observer import ExecutorObserver


class CompositeExecutorObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from ExecutorObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[ExecutorObserver]) -> None:
        self._observers = observers

    def cache_hit(self, key: str) -> None:
        for obs in self._observers:
            obs.cache_hit(key=key)

    def cache_miss(self, key: str) -> None:
        for obs in self._observers:
            obs.cache_miss(key=key)

    def attempt_failed(
        self, key: str, attempt: int, kind: ErrorKind, reason: str
    ) -> None:
        for obs in self._observers:
            obs.attempt_failed(key=key, attempt=attempt, kind=kind, reason=reason)

    def retry_scheduled(self, key: str, attempt: int, delay_seconds: float) -> None:
        for obs in self._observers:
            obs.retry_scheduled(key=key, attempt=attempt, delay_seconds=delay_seconds)

    def call_succeeded(self, key: str, attempts: int) -> None:
        for obs in self._observers:
            obs.call_succeeded(key=key, attempts=attempts)

    def call_failed(
        self, key: str, attempts: int, kind: ErrorKind, reason: str
    ) -> None:
        for obs in self._observers:
            obs.call_failed(key=key, attempts=attempts, kind=kind, reason=reason)

    def call_cancelled(self, key: str, attempt: int) -> None:
        for obs in self._observers:
            obs.call_cancelled(key=key, attempt=attempt)

    def cache_invalidated(self, key: str) -> None:
        for obs in self._observers:
            obs.cache_invalidated(key=key)

    def cache_cleared(self) -> None:
        for obs in self._observers:
            obs.cache_cleared()
