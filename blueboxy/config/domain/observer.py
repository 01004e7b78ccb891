"""Observer port for the config domain — defines events in domain language."""

from pathlib import Path
from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, path: Path, policy_names: list[str]) -> None: ...

    def config_jitter_disabled_warning(self, policy_name: str) -> None: ...
