"""Attempt value object — one try inside a single executor call."""

from dataclasses import dataclass

from blueboxy.remote.domain.errors import RemoteCallError


@dataclass(frozen=True)
class Attempt:
    """Immutable record of one attempt. Never persisted."""

    number: int
    error: RemoteCallError | None = None
    delay_seconds: float | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
