"""Field checks used by ``Settings._validate`` implementations.

Each check raises :class:`InvalidSettingValueError` naming the environment
variable, so the message points at what the operator has to fix.
"""
from __future__ import annotations

from typing import Any, Iterable

from srvkit.config.validation.errors import InvalidSettingValueError


def one_of(setting_name: str, value: Any, choices: Iterable[Any]) -> None:
    choices = tuple(choices)
    if value not in choices:
        raise InvalidSettingValueError(setting_name, value, f"expected one of {', '.join(map(str, choices))}")


def positive(setting_name: str, value: float) -> None:
    if value <= 0:
        raise InvalidSettingValueError(setting_name, value, "must be greater than zero")


def in_range(setting_name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise InvalidSettingValueError(setting_name, value, f"must be between {low} and {high}")


def not_blank(setting_name: str, value: str) -> None:
    if not value.strip():
        raise InvalidSettingValueError(setting_name, value, "must not be empty")


def has_scheme(setting_name: str, value: str, *schemes: str) -> None:
    if not value.startswith(tuple(f"{s}://" for s in schemes)):
        raise InvalidSettingValueError(setting_name, value, f"expected a {' or '.join(schemes)} URI")


__all__ = ["has_scheme", "in_range", "not_blank", "one_of", "positive"]
