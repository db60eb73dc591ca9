"""Observability – get_logger helper and search log enrichment.

The enrichment helpers bind values into structlog's context variables, so
every event logged later in the same request carries them.
"""
from __future__ import annotations

import contextlib
from typing import Any, Iterator, Sequence

import structlog

QUERY_LOG_LIMIT = 3000
SEARCH_LOG_KEYS = (
    "elastic_indexes",
    "elastic_query",
    "elastic_took_internal_ms",
    "elastic_shards",
)


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def truncate(text: str, size: int) -> str:
    """Cut ``text`` to at most ``size`` characters."""
    if size <= 0:
        return ""
    return text[:size]


@contextlib.contextmanager
def search_log_context() -> Iterator[None]:
    """Drop the search enrichment keys from the log context on exit."""
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*SEARCH_LOG_KEYS)


def enrich_log_with_indexes(indexes: Sequence[str]) -> None:
    structlog.contextvars.bind_contextvars(elastic_indexes=list(indexes))


def enrich_log_with_query(query: str) -> None:
    structlog.contextvars.bind_contextvars(elastic_query=truncate(query, QUERY_LOG_LIMIT))


def enrich_log_with_took(took_ms: int) -> None:
    structlog.contextvars.bind_contextvars(elastic_took_internal_ms=took_ms)


def enrich_log_with_shards(shards: int) -> None:
    structlog.contextvars.bind_contextvars(elastic_shards=shards)


__all__ = [
    "QUERY_LOG_LIMIT",
    "SEARCH_LOG_KEYS",
    "enrich_log_with_indexes",
    "enrich_log_with_query",
    "enrich_log_with_shards",
    "enrich_log_with_took",
    "get_logger",
    "search_log_context",
    "truncate",
]
