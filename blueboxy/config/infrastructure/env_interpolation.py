"""Recursive ${ENV_VAR} / ${ENV_VAR:-default} interpolation for raw config data."""

import os
import re

_ENV_VAR_PATTERN = re.compile(
    r"\$\{(?P<name>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
)

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(data: RawValue) -> list[str]:
    """
    Return the names of every referenced env var that is unset and has no
    inline default, in first-seen order and without duplicates.
    """
    missing: list[str] = []
    _walk(data, missing)
    return missing


def _walk(data: RawValue, missing: list[str]) -> None:
    if isinstance(data, str):
        for match in _ENV_VAR_PATTERN.finditer(data):
            name = match.group("name")
            if (
                match.group("default") is None
                and name not in os.environ
                and name not in missing
            ):
                missing.append(name)
    elif isinstance(data, list):
        for item in data:
            _walk(item, missing)
    elif isinstance(data, dict):
        for value in data.values():
            _walk(value, missing)


def _substitute(match: re.Match[str]) -> str:
    name = match.group("name")
    if name in os.environ:
        return os.environ[name]
    return match.group("default") or ""


def interpolate(data: RawValue) -> RawValue:
    """
    Substitute every ${ENV_VAR} occurrence with its runtime value, falling
    back to the inline default. Call `collect_missing_vars` first.
    """
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(_substitute, data)
    if isinstance(data, list):
        return [interpolate(item) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value) for key, value in data.items()}
    return data
