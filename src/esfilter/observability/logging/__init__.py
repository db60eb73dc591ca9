"""Observability – structured logging helpers."""
from esfilter.observability.logging.factory import JsonLoggerFactory, RedactKeys
from esfilter.observability.logging.processors import (
    QUERY_LOG_LIMIT,
    SEARCH_LOG_KEYS,
    enrich_log_with_indexes,
    enrich_log_with_query,
    enrich_log_with_shards,
    enrich_log_with_took,
    get_logger,
    search_log_context,
    truncate,
)

__all__ = [
    "QUERY_LOG_LIMIT",
    "SEARCH_LOG_KEYS",
    "JsonLoggerFactory",
    "RedactKeys",
    "enrich_log_with_indexes",
    "enrich_log_with_query",
    "enrich_log_with_shards",
    "enrich_log_with_took",
    "get_logger",
    "search_log_context",
    "truncate",
]
