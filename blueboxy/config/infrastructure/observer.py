"""Structlog implementation of the ConfigObserver port."""

from pathlib import Path

import structlog


class StructlogConfigObserver:
    """Delegates config domain events to structlog.

    Satisfies the ConfigObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, path: Path, policy_names: list[str]) -> None:
        self._log.info("config.loaded", path=str(path), policy_names=policy_names)

    def config_jitter_disabled_warning(self, policy_name: str) -> None:
        self._log.warning(
            "config.jitter_disabled_warning",
            policy_name=policy_name,
            message="Multi-attempt policy without jitter may cause synchronized retries",
        )
