"""Structlog implementation of the GeneratorObserver port."""

import structlog


class StructlogGeneratorObserver:
    """Delegates generator events to structlog.

    Satisfies the GeneratorObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def generation_started(self, category: str, model: str) -> None:
        self._log.info("messaging.generation_started", category=category, model=model)

    def generation_completed(
        self, category: str, model: str, duration_ms: int
    ) -> None:
        self._log.info(
            "messaging.generation_completed",
            category=category,
            model=model,
            duration_ms=duration_ms,
        )

    def generation_failed(self, category: str, model: str, reason: str) -> None:
        self._log.error(
            "messaging.generation_failed",
            category=category,
            model=model,
            reason=reason,
        )
