"""Config – 12-factor settings loaded from the environment."""

from srvkit.config.app import (
    AppSettings,
    Config,
    DatabaseSettings,
    OtelSettings,
    RedisSettings,
    load_config,
)
from srvkit.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from srvkit.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "AppSettings",
    "Config",
    "ConfigError",
    "DatabaseSettings",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "OtelSettings",
    "RedisSettings",
    "Settings",
    "SettingsLoader",
    "load_config",
]
