"""Config settings."""
from esfilter.config.settings.base import Settings, secret_field
from esfilter.config.settings.elastic import DEFAULT_RETRY_BACKOFF_MS, ElasticSettings
from esfilter.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_RETRY_BACKOFF_MS",
    "ElasticSettings",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
    "secret_field",
]
