"""Structlog implementation of the ExecutorObserver port."""

import structlog

from blueboxy.remote.domain.error_kind import ErrorKind


class StructlogExecutorObserver:
    """Delegates remote-call events to structlog.

    Satisfies the ExecutorObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def cache_hit(self, key: str) -> None:
        self._log.debug("remote_call.cache_hit", key=key)

    def cache_miss(self, key: str) -> None:
        self._log.debug("remote_call.cache_miss", key=key)

    def attempt_failed(
        self, key: str, attempt: int, kind: ErrorKind, reason: str
    ) -> None:
        self._log.info(
            "remote_call.attempt_failed",
            key=key,
            attempt=attempt,
            kind=str(kind),
            reason=reason,
        )

    def retry_scheduled(self, key: str, attempt: int, delay_seconds: float) -> None:
        self._log.warning(
            "remote_call.retry_scheduled",
            key=key,
            attempt=attempt,
            delay_seconds=round(delay_seconds, 3),
        )

    def call_succeeded(self, key: str, attempts: int) -> None:
        self._log.info("remote_call.succeeded", key=key, attempts=attempts)

    def call_failed(
        self, key: str, attempts: int, kind: ErrorKind, reason: str
    ) -> None:
        self._log.error(
            "remote_call.failed",
            key=key,
            attempts=attempts,
            kind=str(kind),
            reason=reason,
        )

    def call_cancelled(self, key: str, attempt: int) -> None:
        self._log.info("remote_call.cancelled", key=key, attempt=attempt)

    def cache_invalidated(self, key: str) -> None:
        self._log.debug("remote_call.cache_invalidated", key=key)

    def cache_cleared(self) -> None:
        self._log.info("remote_call.cache_cleared")
