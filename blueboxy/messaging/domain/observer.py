"""GeneratorObserver port — events emitted around each backend call."""

from typing import Protocol


class GeneratorObserver(Protocol):
    def generation_started(self, category: str, model: str) -> None: ...

    def generation_completed(
        self, category: str, model: str, duration_ms: int
    ) -> None: ...

    def generation_failed(self, category: str, model: str, reason: str) -> None: ...
