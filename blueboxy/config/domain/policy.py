"""PolicyConfig — a named retry policy as written in the config file."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.retry.domain.policy import PRESETS, RetryPolicy

_OVERRIDABLE = (
    "max_attempts",
    "base_delay_seconds",
    "backoff_multiplier",
    "max_delay_seconds",
    "retryable_kinds",
    "jitter_fraction",
)
_REQUIRED_WITHOUT_PRESET = _OVERRIDABLE[:4]


class PolicyConfig(BaseModel, frozen=True):
    """Either ``preset: <name>`` (optionally with overrides) or a full policy."""

    preset: str | None = None
    max_attempts: int | None = Field(default=None, ge=1)
    base_delay_seconds: float | None = Field(default=None, ge=0.0)
    backoff_multiplier: float | None = Field(default=None, gt=1.0)
    max_delay_seconds: float | None = Field(default=None, ge=0.0)
    retryable_kinds: list[ErrorKind] | None = None
    jitter_fraction: float | None = Field(default=None, ge=0.0, lt=1.0)

    @model_validator(mode="after")
    def _resolvable(self) -> "PolicyConfig":
        if self.preset is not None and self.preset not in PRESETS:
            known = ", ".join(sorted(PRESETS))
            raise ValueError(f"unknown preset '{self.preset}' (known: {known})")
        if self.preset is None:
            missing = [f for f in _REQUIRED_WITHOUT_PRESET if getattr(self, f) is None]
            if missing:
                raise ValueError(
                    f"policy without a preset must set: {', '.join(missing)}"
                )
        try:
            self.to_policy()
        except ValidationError as exc:
            raise ValueError(str(exc)) from exc
        return self

    def to_policy(self) -> RetryPolicy:
        """Build the RetryPolicy this entry describes."""
        fields: dict[str, Any] = (
            PRESETS[self.preset].model_dump() if self.preset is not None else {}
        )
        for name in _OVERRIDABLE:
            value = getattr(self, name)
            if value is not None:
                fields[name] = frozenset(value) if name == "retryable_kinds" else value
        return RetryPolicy.model_validate(fields)
