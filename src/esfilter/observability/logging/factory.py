"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import IO, Any, Iterable

import structlog

REDACTED = "***"
DEFAULT_REDACT_KEYS = frozenset({"password", "authorization", "api_key"})


class RedactKeys:
    """structlog processor masking the values of ``keys`` (case-insensitive)."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = frozenset(k.lower() for k in keys)

    def __call__(self, logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        for key in event_dict:
            if key.lower() in self._keys:
                event_dict[key] = REDACTED
        return event_dict


class JsonLoggerFactory:
    """Configure structlog for one-JSON-object-per-line output.

    Events go through the stdlib logging bridge, so ``level`` filters them
    like any other stdlib record. Values bound with
    ``structlog.contextvars`` (the ``elastic_*`` search keys) are merged into
    every event.
    """

    @staticmethod
    def configure(
        level: int = logging.INFO,
        *,
        redact_keys: Iterable[str] = DEFAULT_REDACT_KEYS,
        stream: IO[str] | None = None,
    ) -> None:
        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            RedactKeys(redact_keys),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        handler = logging.StreamHandler(stream)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )
        root = logging.getLogger()
        for existing in [h for h in root.handlers if getattr(h, "_esfilter_json", False)]:
            root.removeHandler(existing)
        handler._esfilter_json = True  # type: ignore[attr-defined]
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["DEFAULT_REDACT_KEYS", "REDACTED", "JsonLoggerFactory", "RedactKeys"]
