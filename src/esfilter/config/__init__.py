"""Config – settings and their validation errors."""
from esfilter.config.settings import (
    ElasticSettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)
from esfilter.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "ElasticSettings",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
