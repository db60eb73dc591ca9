"""Query – search request body."""
from __future__ import annotations

import json
from typing import Any

from esfilter.aggregations.nodes import AggsQuery
from esfilter.kernel.errors import DecodeError, ErrorCode
from esfilter.observability.logging import get_logger
from esfilter.query.nodes import QueryNode

log = get_logger(__name__)


def build_search_body(
    query: QueryNode,
    aggs: AggsQuery | None = None,
    search_after: str = "",
) -> dict[str, Any]:
    """Assemble ``{"query", "aggs"?, "search_after"?}``.

    ``search_after`` is a paginator returned by a previous search (a JSON
    array); it is decoded before being embedded.
    """
    body: dict[str, Any] = {"query": query.to_dict()}
    if aggs is not None and not aggs.is_empty:
        body["aggs"] = aggs.to_dict()
    if search_after:
        try:
            body["search_after"] = json.loads(search_after)
        except json.JSONDecodeError as exc:
            raise DecodeError(
                "search_after is not a valid paginator",
                code=ErrorCode.BAD_REQUEST,
                detail={"search_after": search_after},
                cause=exc,
            ) from exc
    log.debug("search_body_compiled", body=body)
    return body


def marshal(document: Any) -> str:
    """Compact, key-order preserving JSON."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, default=str)


def marshal_query(query: QueryNode | None) -> str:
    if query is None:
        return ""
    return marshal(query.to_dict())


__all__ = ["build_search_body", "marshal", "marshal_query"]
