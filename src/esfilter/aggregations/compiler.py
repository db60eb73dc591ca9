"""Aggregations – request compiler."""
from __future__ import annotations

from typing import Iterable

from esfilter.aggregations.nodes import (
    HISTOGRAM_MONTH,
    AggsQuery,
    BucketDateHistogramAggregation,
    BucketTermsAggregation,
    MetricAggregation,
)
from esfilter.aggregations.request import RequestAggregation, RequestMetricAggregation
from esfilter.kernel.errors import AggregationTypeNotSupportedError

METRIC_OPERATIONS: dict[str, str] = {
    "min": "min",
    "max": "max",
    "sum": "sum",
    "count": "value_count",
}


def has_aggregations(request: RequestAggregation | None) -> bool:
    return request is not None and bool(request.metrics or request.buckets)


def build_metric_aggs(metrics: Iterable[RequestMetricAggregation]) -> tuple[MetricAggregation, ...]:
    nodes: list[MetricAggregation] = []
    for metric in metrics:
        operation = METRIC_OPERATIONS.get(metric.type)
        if operation is None:
            raise AggregationTypeNotSupportedError(metric.type)
        nodes.append(MetricAggregation(metric.name, metric.field, operation))
    return tuple(nodes)


def build_aggs_query(request: RequestAggregation) -> AggsQuery:
    """Compile ``request``; an unknown type tag raises
    :class:`~esfilter.kernel.errors.AggregationTypeNotSupportedError`."""
    metrics = build_metric_aggs(request.metrics)
    terms: list[BucketTermsAggregation] = []
    histograms: list[BucketDateHistogramAggregation] = []

    for bucket in request.buckets:
        match bucket.type:
            case "term":
                terms.append(
                    BucketTermsAggregation(
                        bucket.name,
                        bucket.field,
                        sub_metrics=build_metric_aggs(bucket.metrics_sub_agg),
                        size=bucket.size,
                        min_doc_count=bucket.min_doc_count,
                    )
                )
            case "monthlyhistogram":
                histograms.append(
                    BucketDateHistogramAggregation(
                        bucket.name,
                        bucket.field,
                        interval=HISTOGRAM_MONTH,
                        sub_metrics=build_metric_aggs(bucket.metrics_sub_agg),
                        min_doc_count=bucket.min_doc_count,
                    )
                )
            case _:
                raise AggregationTypeNotSupportedError(bucket.type)

    return AggsQuery(metrics, tuple(terms), tuple(histograms))


__all__ = ["METRIC_OPERATIONS", "build_aggs_query", "build_metric_aggs", "has_aggregations"]
