"""esfilter – compile filter records into search-engine queries and decode replies.

Quick start::

    from dataclasses import dataclass
    from esfilter import Filter, SearchClient, SearchConfig, es_field

    @dataclass
    class PersonFilter:
        names: list[str] = es_field("Name")

    client = SearchClient(transport)
    response = await client.search(
        SearchConfig(indexes=("people",), filter=Filter(must=PersonFilter(["John"])))
    )
"""
from esfilter.aggregations import (
    RequestAggregation,
    RequestBucketAggregation,
    RequestMetricAggregation,
    ResponseAggregation,
    parse_aggregations,
)
from esfilter.application.search import (
    SearchClient,
    SearchConfig,
    SearchTransport,
    Sorter,
    Sorters,
    TransportResponse,
)
from esfilter.kernel.errors import BaseError, ErrorCode
from esfilter.query import (
    CustomSearch,
    Filter,
    FloatRange,
    FullTextSearchMust,
    FullTextSearchShould,
    FunctionQuery,
    IntRange,
    MultiMatchSearchShould,
    Nested,
    TimeRange,
    build_bool_query,
    es_field,
)
from esfilter.response import SearchResponse, parse_response

__version__ = "0.1.0"

__all__ = [
    "BaseError",
    "CustomSearch",
    "ErrorCode",
    "Filter",
    "FloatRange",
    "FullTextSearchMust",
    "FullTextSearchShould",
    "FunctionQuery",
    "IntRange",
    "MultiMatchSearchShould",
    "Nested",
    "RequestAggregation",
    "RequestBucketAggregation",
    "RequestMetricAggregation",
    "ResponseAggregation",
    "SearchClient",
    "SearchConfig",
    "SearchResponse",
    "SearchTransport",
    "Sorter",
    "Sorters",
    "TimeRange",
    "TransportResponse",
    "__version__",
    "build_bool_query",
    "es_field",
    "parse_aggregations",
    "parse_response",
]
