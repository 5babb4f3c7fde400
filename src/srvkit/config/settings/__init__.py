"""Config settings – env-based configuration."""
from srvkit.config.settings.base import REDACTED, Settings
from srvkit.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "REDACTED", "Settings", "SettingsLoader"]
