"""Configuration errors.

All of them are fatal at startup; ``python -m srvkit`` exits with status 2.
"""
from __future__ import annotations

from typing import Any

from srvkit.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, **kwargs: Any) -> None:
        super().__init__(f"{setting_name} is required but not set", **kwargs)
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """*value* was read for *setting_name* but cannot be used (see ``reason``)."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: Any, reason: str, **kwargs: Any) -> None:
        super().__init__(f"invalid value {value!r} for {setting_name}: {reason}", **kwargs)
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
