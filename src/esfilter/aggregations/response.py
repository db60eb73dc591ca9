"""Aggregations – response decoder.

The ``aggregations`` section of a search reply is polymorphic: a metric
result holds a ``value``, a bucket result holds a ``buckets`` list whose
entries carry their own metric results next to ``key`` and ``doc_count``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from esfilter.kernel.errors import AggregationShapeNotSupportedError, AggregationTypeError

_BUCKET_RESERVED = frozenset({"key", "key_as_string", "doc_count"})


@dataclass(frozen=True)
class ResponseMetricAggregation:
    name: str
    value: Any


@dataclass(frozen=True)
class ResponseBucket:
    key: str
    doc_count: int
    metrics_aggregations: tuple[ResponseMetricAggregation, ...] = ()


@dataclass(frozen=True)
class ResponseBucketAggregation:
    name: str
    buckets: tuple[ResponseBucket, ...] = ()


@dataclass(frozen=True)
class ResponseAggregation:
    metric_aggregations: tuple[ResponseMetricAggregation, ...] = field(default_factory=tuple)
    bucket_aggregations: tuple[ResponseBucketAggregation, ...] = field(default_factory=tuple)


def parse_aggregations(raw: Mapping[str, Any]) -> ResponseAggregation:
    """Decode ``raw`` (name -> aggregation body) in input order."""
    metrics: list[ResponseMetricAggregation] = []
    buckets: list[ResponseBucketAggregation] = []
    for name, data in raw.items():
        parsed = _parse_one(name, data)
        if isinstance(parsed, ResponseMetricAggregation):
            metrics.append(parsed)
        else:
            buckets.append(parsed)
    return ResponseAggregation(tuple(metrics), tuple(buckets))


def _parse_one(name: str, data: Any) -> ResponseMetricAggregation | ResponseBucketAggregation:
    if not isinstance(data, Mapping):
        raise AggregationShapeNotSupportedError(name)
    if "value" in data:
        return ResponseMetricAggregation(name, data["value"])
    if isinstance(data.get("buckets"), list):
        return ResponseBucketAggregation(
            name, tuple(_parse_bucket(name, entry) for entry in data["buckets"])
        )
    raise AggregationShapeNotSupportedError(name)


def _parse_bucket(name: str, entry: Any) -> ResponseBucket:
    if not isinstance(entry, Mapping):
        raise AggregationTypeError(name, f"bucket must be an object, got {type(entry).__name__}")

    doc_count = entry.get("doc_count")
    if isinstance(doc_count, bool) or not isinstance(doc_count, (int, float)):
        raise AggregationTypeError(name, f"doc_count must be a number, got {type(doc_count).__name__}")

    metrics: list[ResponseMetricAggregation] = []
    for sub_name, sub_data in entry.items():
        if sub_name in _BUCKET_RESERVED or not isinstance(sub_data, Mapping):
            continue
        parsed = _parse_one(sub_name, sub_data)
        if isinstance(parsed, ResponseMetricAggregation):
            metrics.append(parsed)

    return ResponseBucket(_bucket_key(name, entry), int(doc_count), tuple(metrics))


def _bucket_key(name: str, entry: Mapping[str, Any]) -> str:
    if "key_as_string" in entry:
        key_as_string = entry["key_as_string"]
        if not isinstance(key_as_string, str):
            raise AggregationTypeError(
                name, f"key_as_string must be a string, got {type(key_as_string).__name__}"
            )
        return key_as_string

    key = entry.get("key")
    if isinstance(key, str):
        return key
    if isinstance(key, bool) or not isinstance(key, (int, float)):
        raise AggregationTypeError(name, f"key must be a string or a number, got {type(key).__name__}")
    return format_key(key)


def format_key(key: int | float) -> str:
    """Decimal rendering of a numeric key; integral floats lose the fraction."""
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    return str(key)


__all__ = [
    "ResponseAggregation",
    "ResponseBucket",
    "ResponseBucketAggregation",
    "ResponseMetricAggregation",
    "format_key",
    "parse_aggregations",
]
