"""Aggregations – wire nodes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from esfilter.observability.logging import get_logger

log = get_logger(__name__)

HISTOGRAM_MONTH = "month"


@dataclass(frozen=True)
class MetricAggregation:
    """``{operation: {field}}``; ``operation`` is one of min, max, sum, value_count."""

    name: str
    field: str
    operation: str

    def to_dict(self) -> dict[str, Any]:
        opts: dict[str, Any] = {}
        if self.field:
            opts["field"] = self.field
        return {self.operation: opts}


def _sub_aggs(metrics: tuple[MetricAggregation, ...]) -> dict[str, Any]:
    return {m.name: m.to_dict() for m in metrics}


@dataclass(frozen=True)
class BucketTermsAggregation:
    """One bucket per unique value of ``field``."""

    name: str
    field: str
    sub_metrics: tuple[MetricAggregation, ...] = ()
    size: int | None = None
    min_doc_count: int | None = None
    show_term_doc_count_error: bool = True

    def to_dict(self) -> dict[str, Any]:
        opts: dict[str, Any] = {}
        if self.field:
            opts["field"] = self.field
        if self.size is not None and self.size >= 0:
            opts["size"] = self.size
        if self.min_doc_count is not None and self.min_doc_count >= 0:
            opts["min_doc_count"] = self.min_doc_count
        opts["show_term_doc_count_error"] = self.show_term_doc_count_error
        source: dict[str, Any] = {"terms": opts}
        if self.sub_metrics:
            source["aggs"] = _sub_aggs(self.sub_metrics)
        return source


@dataclass(frozen=True)
class BucketDateHistogramAggregation:
    """Fixed-interval date buckets over ``field``."""

    name: str
    field: str
    interval: str = HISTOGRAM_MONTH
    sub_metrics: tuple[MetricAggregation, ...] = ()
    min_doc_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        opts: dict[str, Any] = {}
        if self.field:
            opts["field"] = self.field
        if self.interval:
            opts["interval"] = self.interval
        if self.min_doc_count is not None:
            opts["min_doc_count"] = self.min_doc_count
        source: dict[str, Any] = {"date_histogram": opts}
        if self.sub_metrics:
            source["aggs"] = _sub_aggs(self.sub_metrics)
        return source


@dataclass(frozen=True)
class AggsQuery:
    """All aggregations of a request, merged into one ``name -> node`` mapping.

    Metrics are merged first, then terms buckets, then histogram buckets. A
    repeated name overwrites the earlier entry.
    """

    metrics: tuple[MetricAggregation, ...] = ()
    bucket_terms: tuple[BucketTermsAggregation, ...] = ()
    bucket_date_histograms: tuple[BucketDateHistogramAggregation, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.metrics or self.bucket_terms or self.bucket_date_histograms)

    def to_dict(self) -> dict[str, Any]:
        aggs: dict[str, Any] = {}
        for node in (*self.metrics, *self.bucket_terms, *self.bucket_date_histograms):
            if node.name in aggs:
                log.warning("aggregation_name_collision", aggregation=node.name)
            aggs[node.name] = node.to_dict()
        return aggs


__all__ = [
    "HISTOGRAM_MONTH",
    "AggsQuery",
    "BucketDateHistogramAggregation",
    "BucketTermsAggregation",
    "MetricAggregation",
]
