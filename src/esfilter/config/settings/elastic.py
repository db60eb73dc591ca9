"""Config settings – ElasticSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from esfilter.config.settings.base import Settings, secret_field
from esfilter.config.validation import InvalidSettingValueError

DEFAULT_RETRY_BACKOFF_MS = (10, 100)


@dataclasses.dataclass
class ElasticSettings(Settings):
    """Connection settings for the search engine, read from ``ELASTIC_*``.

    ``retry_backoff_ms`` lists the waits between connection retries; one
    retry is made per entry.
    """

    _prefix: ClassVar[str] = "ELASTIC"

    urls: list[str]
    username: str | None = None
    password: str | None = secret_field(default=None)
    verify_certs: bool = True
    ca_certs: str | None = None
    request_timeout: float = 10.0
    retry_backoff_ms: list[int] = dataclasses.field(
        default_factory=lambda: list(DEFAULT_RETRY_BACKOFF_MS)
    )

    def _validate(self) -> None:
        if not self.urls:
            raise InvalidSettingValueError("urls", self.urls, "at least one url is required")
        for url in self.urls:
            if not url.startswith(("http://", "https://")):
                raise InvalidSettingValueError("urls", url, "must start with http:// or https://")
        if (self.username is None) != (self.password is None):
            raise InvalidSettingValueError(
                "username", self.username, "username and password must be given together"
            )
        if self.request_timeout < 0:
            raise InvalidSettingValueError(
                "request_timeout", self.request_timeout, "must not be negative"
            )
        for tick in self.retry_backoff_ms:
            if tick < 0:
                raise InvalidSettingValueError("retry_backoff_ms", tick, "must not be negative")


__all__ = ["DEFAULT_RETRY_BACKOFF_MS", "ElasticSettings"]
