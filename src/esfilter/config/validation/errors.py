"""Config validation errors."""
from __future__ import annotations

from typing import Any

from esfilter.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded or parsed."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable without a default is not set."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{setting_name}] required setting is missing",
            detail={"setting": setting_name},
            **kwargs,
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but fails validation."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{setting_name}] invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
            **kwargs,
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
