"""Response – search reply and engine error decoding."""
from esfilter.response.envelope import (
    SearchResponse,
    ShardsInfo,
    check_error_response,
    check_shards,
    get_paginator_from_hits,
    parse_response,
    root_cause_message,
)

__all__ = [
    "SearchResponse",
    "ShardsInfo",
    "check_error_response",
    "check_shards",
    "get_paginator_from_hits",
    "parse_response",
    "root_cause_message",
]
