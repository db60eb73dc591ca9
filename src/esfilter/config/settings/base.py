"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

SECRET = "secret"


def secret_field(**kwargs: Any) -> Any:
    """A settings field whose value is masked by :meth:`Settings.as_log_dict`."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SECRET] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclasses.dataclass
class Settings:
    """Dataclass settings, validated on construction.

    Subclasses set ``_prefix`` (the env var prefix) and override
    ``_validate`` for cross-field rules.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def as_log_dict(self) -> dict[str, Any]:
        """Field values with secrets masked, safe to log."""
        return {
            f.name: "***" if f.metadata.get(SECRET) and getattr(self, f.name) is not None
            else getattr(self, f.name)
            for f in dataclasses.fields(self)
        }


__all__ = ["SECRET", "Settings", "secret_field"]
