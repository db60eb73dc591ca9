"""Config validation."""
from esfilter.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
