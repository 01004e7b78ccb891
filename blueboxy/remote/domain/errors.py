"""Error types surfaced by remote calls."""

from blueboxy.core.errors import BlueBoxyError
from blueboxy.remote.domain.error_kind import ErrorKind


class RemoteCallError(BlueBoxyError):
    """A classified remote-call failure.

    Wrapped operations may raise this directly to supply their own
    classification; anything else they raise is classified by the executor.
    """

    def __init__(
        self,
        kind: ErrorKind,
        reason: str,
        status_code: int | None = None,
        retry_after_seconds: float | None = None,
    ) -> None:
        super().__init__(
            f"Failed to call remote service: {kind}: {reason}",
            retriable=kind.inherently_retryable,
        )
        self.kind = kind
        self.reason = reason
        self.status_code = status_code
        self.retry_after_seconds = retry_after_seconds
