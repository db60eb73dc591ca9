"""Aggregations – request specification.

Callers describe the aggregations they want with closed-set type tags;
:func:`~esfilter.aggregations.compiler.build_aggs_query` turns them into
wire nodes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

MetricType = Literal["min", "max", "sum", "count"]
BucketType = Literal["term", "monthlyhistogram"]


@dataclass(frozen=True)
class RequestMetricAggregation:
    """Single-value metric computed over a numeric field."""

    name: str
    type: str
    field: str


@dataclass(frozen=True)
class RequestBucketAggregation:
    """Grouping of documents, with metrics computed per bucket."""

    name: str
    type: str
    field: str
    metrics_sub_agg: tuple[RequestMetricAggregation, ...] = ()
    size: int | None = None
    min_doc_count: int | None = None


@dataclass(frozen=True)
class RequestAggregation:
    metrics: tuple[RequestMetricAggregation, ...] = field(default_factory=tuple)
    buckets: tuple[RequestBucketAggregation, ...] = field(default_factory=tuple)


__all__ = [
    "BucketType",
    "MetricType",
    "RequestAggregation",
    "RequestBucketAggregation",
    "RequestMetricAggregation",
]
