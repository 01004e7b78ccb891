"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from blueboxy.config.domain.config import ResilienceConfig
from blueboxy.config.domain.observer import ConfigObserver
from blueboxy.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from blueboxy.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

# Policies with at least this many attempts and no jitter trigger a warning.
_JITTER_WARNING_MIN_ATTEMPTS = 3


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a ResilienceConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> ResilienceConfig:
        """
        Load, interpolate, validate, and return a ResilienceConfig.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated or a policy cannot be built.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        cfg = _build_config(resolved=interpolate(raw))
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(path=path, policy_names=sorted(cfg.policies))
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason="invalid YAML") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top level must be a mapping")
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _build_config(resolved: Any) -> ResilienceConfig:
    try:
        return ResilienceConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: ResilienceConfig, observer: ConfigObserver) -> None:
    for name in sorted(cfg.policies):
        policy = cfg.policies[name].to_policy()
        if (
            policy.max_attempts >= _JITTER_WARNING_MIN_ATTEMPTS
            and policy.jitter_fraction == 0.0
        ):
            observer.config_jitter_disabled_warning(policy_name=name)
