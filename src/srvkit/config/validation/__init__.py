"""Config validation – errors and field checks."""
from srvkit.config.validation import rules
from srvkit.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError", "rules"]
