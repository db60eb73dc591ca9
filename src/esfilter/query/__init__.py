"""Query – filter records, query nodes and the compiler between them."""
from esfilter.query.compiler import build_bool_query, compile_exists, compile_must
from esfilter.query.document import build_search_body, marshal_query
from esfilter.query.entities import (
    CustomQuery,
    CustomSearch,
    Filter,
    FloatRange,
    FullTextSearch,
    FullTextSearchMust,
    FullTextSearchShould,
    FunctionQuery,
    IntRange,
    MultiMatchSearch,
    MultiMatchSearchShould,
    Nested,
    SearchMode,
    TimeRange,
    es_field,
)
from esfilter.query.fields import FieldDescriptor, FieldKind, describe, iter_fields, schema_for
from esfilter.query.nodes import (
    BoolQuery,
    ExistsQuery,
    MatchAllQuery,
    MultiMatchQuery,
    NestedQuery,
    QueryNode,
    RangeQuery,
    RawQuery,
    Script,
    ScriptQuery,
    TermQuery,
    TermsQuery,
)

__all__ = [
    "BoolQuery",
    "CustomQuery",
    "CustomSearch",
    "ExistsQuery",
    "FieldDescriptor",
    "FieldKind",
    "Filter",
    "FloatRange",
    "FullTextSearch",
    "FullTextSearchMust",
    "FullTextSearchShould",
    "FunctionQuery",
    "IntRange",
    "MatchAllQuery",
    "MultiMatchQuery",
    "MultiMatchSearch",
    "MultiMatchSearchShould",
    "Nested",
    "NestedQuery",
    "QueryNode",
    "RangeQuery",
    "RawQuery",
    "Script",
    "ScriptQuery",
    "SearchMode",
    "TermQuery",
    "TermsQuery",
    "TimeRange",
    "build_bool_query",
    "build_search_body",
    "compile_exists",
    "compile_must",
    "describe",
    "es_field",
    "iter_fields",
    "marshal_query",
    "schema_for",
]
