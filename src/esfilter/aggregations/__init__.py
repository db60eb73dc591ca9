"""Aggregations – request compiler and response decoder."""
from esfilter.aggregations.compiler import build_aggs_query, has_aggregations
from esfilter.aggregations.nodes import (
    AggsQuery,
    BucketDateHistogramAggregation,
    BucketTermsAggregation,
    MetricAggregation,
)
from esfilter.aggregations.request import (
    RequestAggregation,
    RequestBucketAggregation,
    RequestMetricAggregation,
)
from esfilter.aggregations.response import (
    ResponseAggregation,
    ResponseBucket,
    ResponseBucketAggregation,
    ResponseMetricAggregation,
    parse_aggregations,
)

__all__ = [
    "AggsQuery",
    "BucketDateHistogramAggregation",
    "BucketTermsAggregation",
    "MetricAggregation",
    "RequestAggregation",
    "RequestBucketAggregation",
    "RequestMetricAggregation",
    "ResponseAggregation",
    "ResponseBucket",
    "ResponseBucketAggregation",
    "ResponseMetricAggregation",
    "build_aggs_query",
    "has_aggregations",
    "parse_aggregations",
]
