"""Response – search reply decoder.

Reads the envelope of a search reply::

    {"took": .., "_shards": {"total", "successful", "failed"},
     "hits": {"total": {"value"}, "hits": [{"_id", "sort"}]},
     "aggregations": {..}}

and the error body the engine returns for a failed request.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any, Mapping, Sequence

from esfilter.aggregations.response import ResponseAggregation, parse_aggregations
from esfilter.kernel.errors import (
    DecodeError,
    EngineResponseError,
    ErrorCode,
    ShardsIncompleteError,
)

UNKNOWN_ELASTIC_ERROR = "unknown elastic error"


@dataclass(frozen=True)
class ShardsInfo:
    total: int = 0
    successful: int = 0
    failed: int = 0


@dataclass(frozen=True)
class SearchResponse:
    ids: tuple[str, ...] = ()
    paginator: str = ""
    total: int = 0
    took: int = 0
    aggregations: ResponseAggregation = field(default_factory=ResponseAggregation)
    shards: ShardsInfo = field(default_factory=ShardsInfo)


def decode_body(body: bytes | str | Mapping[str, Any]) -> Mapping[str, Any]:
    """JSON-decode ``body`` into a mapping (mappings pass through)."""
    if isinstance(body, Mapping):
        return body
    try:
        decoded = json.loads(body)
    except (TypeError, ValueError) as exc:
        raise DecodeError("response body is not valid JSON", cause=exc) from exc
    if not isinstance(decoded, Mapping):
        raise DecodeError(
            "response body must be a JSON object",
            detail={"given": type(decoded).__name__},
        )
    return decoded


def parse_response(body: bytes | str | Mapping[str, Any]) -> SearchResponse:
    """Decode a successful search reply.

    Raises :class:`ShardsIncompleteError` (with the partial response
    attached) when a shard failed, :class:`DecodeError` on a malformed body.
    """
    envelope = decode_body(body)
    hits = _mapping(envelope.get("hits", {}), "hits")
    total = _mapping(hits.get("total", {}), "hits.total")

    shards = parse_shards(envelope.get("_shards"))
    response = SearchResponse(
        total=_integer(total.get("value", 0), "hits.total.value"),
        took=_integer(envelope.get("took", 0), "took"),
        shards=shards or ShardsInfo(),
    )
    if shards is not None:
        check_shards(shards, response=response)

    raw_hits = hits.get("hits") or []
    if not isinstance(raw_hits, list):
        raise DecodeError("hits.hits must be a list", detail={"given": type(raw_hits).__name__})
    entries = [_mapping(hit, "hits.hits[]") for hit in raw_hits]

    raw_aggs = envelope.get("aggregations")
    aggregations = (
        parse_aggregations(_mapping(raw_aggs, "aggregations"))
        if raw_aggs
        else ResponseAggregation()
    )

    return replace(
        response,
        ids=tuple(str(hit.get("_id", "")) for hit in entries),
        paginator=get_paginator_from_hits(entries),
        aggregations=aggregations,
    )


def parse_shards(raw: Any) -> ShardsInfo | None:
    if raw is None:
        return None
    shards = _mapping(raw, "_shards")
    return ShardsInfo(
        total=_integer(shards.get("total", 0), "_shards.total"),
        successful=_integer(shards.get("successful", 0), "_shards.successful"),
        failed=_integer(shards.get("failed", 0), "_shards.failed"),
    )


def check_shards(
    shards: ShardsInfo | Mapping[str, Any], *, response: SearchResponse | None = None
) -> None:
    """Raise :class:`ShardsIncompleteError` when any shard failed."""
    if not isinstance(shards, ShardsInfo):
        shards = parse_shards(shards) or ShardsInfo()
    if shards.failed > 0:
        raise ShardsIncompleteError(
            shards.successful, shards.failed, shards.total, response=response
        )


def get_paginator_from_hits(hits: Sequence[Mapping[str, Any]]) -> str:
    """Compact JSON of the last hit's ``sort`` values, ``""`` without one."""
    if not hits:
        return ""
    last = hits[-1]
    sort = last.get("sort") if last is not None else None
    if sort is None:
        return ""
    return json.dumps(sort, separators=(",", ":"), ensure_ascii=False)


def check_error_response(status: int, body: bytes | str | Mapping[str, Any]) -> None:
    """Raise :class:`EngineResponseError` when ``status`` is an error status."""
    if status < 400:
        return
    detail = {"status": status}
    try:
        payload = decode_body(body)
    except DecodeError as exc:
        raise DecodeError(exc.message, code=ErrorCode.BAD_GATEWAY, detail=detail, cause=exc) from exc
    error = payload.get("error")
    if not isinstance(error, Mapping):
        raise DecodeError(
            "failed to decode error from response", code=ErrorCode.BAD_GATEWAY, detail=detail
        )
    root_causes = error.get("root_cause")
    if not isinstance(root_causes, list):
        raise DecodeError(
            "failed to decode root cause from error response",
            code=ErrorCode.BAD_GATEWAY,
            detail=detail,
        )
    root_reason: Any = None
    if root_causes:
        if not isinstance(root_causes[0], Mapping):
            raise DecodeError(
                "failed to decode root cause map from error response",
                code=ErrorCode.BAD_GATEWAY,
                detail=detail,
            )
        root_reason = root_causes[0].get("reason")

    message = (
        f"[{status_text(status)}] {error.get('type')}: {error.get('reason')}: {root_reason}"
    )
    raise EngineResponseError(message, status=status)


def root_cause_message(details: Mapping[str, Any] | None) -> str:
    """``type[reason]`` of an error followed by each of its root causes."""
    if not details:
        return UNKNOWN_ELASTIC_ERROR
    parts = [f"{details.get('type', '')}[{details.get('reason', '')}]"]
    for cause in details.get("root_cause") or []:
        parts.append(f"{cause.get('type', '')}[{cause.get('reason', '')}]")
    return ": ".join(parts)


def status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DecodeError(f"{where} must be an object", detail={"given": type(value).__name__})
    return value


def _integer(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"{where} must be a number", detail={"given": type(value).__name__})
    return int(value)


__all__ = [
    "UNKNOWN_ELASTIC_ERROR",
    "SearchResponse",
    "ShardsInfo",
    "check_error_response",
    "check_shards",
    "decode_body",
    "get_paginator_from_hits",
    "parse_response",
    "parse_shards",
    "root_cause_message",
    "status_text",
]
