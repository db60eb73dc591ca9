"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
import types
import typing
from typing import Any, Mapping, TypeVar

from esfilter.config.settings.base import Settings
from esfilter.config.validation import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``<PREFIX>_<FIELD>``.

    ``environ`` defaults to ``os.environ``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise ConfigError(f"Failed to parse {env_key}: {exc}", cause=exc) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        if typing.get_origin(type_hint) in (typing.Union, types.UnionType):
            rest = [a for a in typing.get_args(type_hint) if a is not type(None)]
            type_hint = rest[0] if len(rest) == 1 else str
        origin = typing.get_origin(type_hint)
        args = typing.get_args(type_hint)
        if type_hint is bool:
            return value.lower() in ("1", "true", "yes", "on")
        if type_hint is int:
            return int(value)
        if type_hint is float:
            return float(value)
        if origin is list:
            items = [v.strip() for v in value.split(",") if v.strip()]
            if args and args[0] in (int, float):
                return [args[0](v) for v in items]
            return items
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
