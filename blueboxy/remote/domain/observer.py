"""ExecutorObserver port — domain events emitted by the Cached Retry Executor."""

from typing import Protocol

from blueboxy.remote.domain.error_kind import ErrorKind


class ExecutorObserver(Protocol):
    """Observer port for remote-call events.

    Implementations may log to structlog, aggregate statistics, or record for
    tests. The executor itself performs no I/O.
    """

    def cache_hit(self, key: str) -> None: ...

    def cache_miss(self, key: str) -> None: ...

    def attempt_failed(
        self, key: str, attempt: int, kind: ErrorKind, reason: str
    ) -> None: ...

    def retry_scheduled(self, key: str, attempt: int, delay_seconds: float) -> None: ...

    def call_succeeded(self, key: str, attempts: int) -> None: ...

    def call_failed(
        self, key: str, attempts: int, kind: ErrorKind, reason: str
    ) -> None: ...

    def call_cancelled(self, key: str, attempt: int) -> None: ...

    def cache_invalidated(self, key: str) -> None: ...

    def cache_cleared(self) -> None: ...
