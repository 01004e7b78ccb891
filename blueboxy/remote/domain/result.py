"""RemoteCallResult — the two-case outcome of one executor call."""

from dataclasses import dataclass

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError


@dataclass(frozen=True)
class Success[T]:
    """The call produced a value, either fresh or served from cache."""

    value: T
    attempts: int
    from_cache: bool = False


@dataclass(frozen=True)
class Failure:
    """The call ended without a value. Carries enough to render a message."""

    error: RemoteCallError
    attempts: int

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def reason(self) -> str:
        return self.error.reason

    @property
    def retryable(self) -> bool:
        """Whether the UI may reasonably offer the user a retry action."""
        return self.error.kind.inherently_retryable


type RemoteCallResult[T] = Success[T] | Failure
