"""Query – filter compiler.

Walks the records of a :class:`~esfilter.query.entities.Filter` and turns
every non-skipped field into query nodes. Compilation is pure: the same
filter always yields the same tree.
"""
from __future__ import annotations

from typing import Any, Mapping

from esfilter.kernel.errors import (
    CustomQueryError,
    StructNotSupportedError,
    TypeNotSupportedError,
)
from esfilter.query.entities import (
    CustomSearch,
    Filter,
    FullTextSearch,
    MultiMatchSearch,
    Nested,
    SearchMode,
)
from esfilter.query.fields import FieldDescriptor, FieldKind, iter_fields
from esfilter.query.nodes import (
    BoolQuery,
    ExistsQuery,
    MatchAllQuery,
    MultiMatchQuery,
    NestedQuery,
    QueryNode,
    RangeQuery,
    RawQuery,
    TermQuery,
    TermsQuery,
)


def build_bool_query(filter: Filter) -> QueryNode:
    """Compile ``filter`` into a single root node."""
    must = compile_must(filter.must) if filter.must is not None else []
    must_not = compile_must(filter.must_not) if filter.must_not is not None else []
    exists: list[QueryNode] = []
    not_exists: list[QueryNode] = []
    if filter.exists is not None:
        exists, not_exists = compile_exists(filter.exists)
    return combine(must, must_not, exists, not_exists)


def combine(
    must: list[QueryNode],
    must_not: list[QueryNode],
    exists: list[QueryNode],
    not_exists: list[QueryNode],
) -> QueryNode:
    if not (must or must_not or exists or not_exists):
        return MatchAllQuery()
    if len(must) == 1 and not (must_not or exists or not_exists):
        return must[0]
    return BoolQuery(must=tuple(must + exists), must_not=tuple(must_not + not_exists))


def compile_must(record: Any) -> list[QueryNode]:
    """Term, range, nested, text and custom nodes for ``record``."""
    queries: list[QueryNode] = []
    for descriptor, value in iter_fields(record):
        queries.extend(_must_nodes(descriptor, value))
    return queries


def compile_exists(record: Any) -> tuple[list[QueryNode], list[QueryNode]]:
    """Exists nodes for ``True`` flags and not-exists nodes for ``False`` ones."""
    exists: list[QueryNode] = []
    not_exists: list[QueryNode] = []
    for descriptor, value in iter_fields(record):
        match descriptor.kind:
            case FieldKind.BOOL:
                (exists if value else not_exists).append(ExistsQuery(descriptor.name))
            case FieldKind.NESTED:
                path = _nested_path(descriptor, value)
                inner_exists, inner_not_exists = compile_exists(value.payload)
                exists.extend(fold_nested(path, inner_exists))
                not_exists.extend(fold_nested(path, inner_not_exists))
            case FieldKind.SCALAR | FieldKind.STRINGS | FieldKind.UINTS:
                raise TypeNotSupportedError(descriptor.attr, descriptor.type_name)
            case _:
                raise StructNotSupportedError(descriptor.name)
    return exists, not_exists


def fold_nested(path: str, queries: list[QueryNode]) -> list[QueryNode]:
    """Wrap ``queries`` into at most one nested node."""
    if not queries:
        return []
    if len(queries) == 1:
        return [NestedQuery(path, queries[0])]
    return [NestedQuery(path, BoolQuery(must=tuple(queries)))]


def _must_nodes(descriptor: FieldDescriptor, value: Any) -> list[QueryNode]:
    match descriptor.kind:
        case FieldKind.STRINGS:
            return [TermsQuery(descriptor.name, tuple(value))]
        case FieldKind.UINTS:
            if any(v < 0 for v in value):
                raise TypeNotSupportedError(descriptor.attr, "negative integer")
            return [TermsQuery(descriptor.name, tuple(value))]
        case FieldKind.BOOL:
            return [TermQuery(descriptor.name, value)]
        case FieldKind.RANGE:
            lower, upper = value.bounds()
            return [RangeQuery(descriptor.name, lower, upper)]
        case FieldKind.NESTED:
            return fold_nested(_nested_path(descriptor, value), compile_must(value.payload))
        case FieldKind.FULL_TEXT:
            return [_full_text_query(value, descriptor.wire_names)]
        case FieldKind.MULTI_MATCH:
            return [_multi_match_query(value, descriptor.wire_names)]
        case FieldKind.CUSTOM:
            return [_custom_query(descriptor, value)]
        case FieldKind.RECORD:
            raise StructNotSupportedError(descriptor.name)
        case _:
            raise TypeNotSupportedError(descriptor.attr, descriptor.type_name)


def _nested_path(descriptor: FieldDescriptor, value: Nested) -> str:
    return value.path or descriptor.name


def _full_text_query(search: FullTextSearch, fields: tuple[str, ...]) -> QueryNode:
    nodes = tuple(
        MultiMatchQuery(text, fields, type="phrase_prefix") for text in search.payload
    )
    if not nodes:
        return MatchAllQuery()
    if search.mode is SearchMode.MUST:
        return BoolQuery(must=nodes)
    return BoolQuery(should=nodes)


def _multi_match_query(search: MultiMatchSearch, fields: tuple[str, ...]) -> QueryNode:
    nodes = tuple(MultiMatchQuery(text, fields, type="best_fields") for text in search.payload)
    if not nodes:
        return MatchAllQuery()
    return BoolQuery(should=nodes)


def _custom_query(descriptor: FieldDescriptor, search: CustomSearch) -> QueryNode:
    node = search.builder.build_query()
    if isinstance(node, QueryNode):
        return node
    if isinstance(node, Mapping):
        return RawQuery(node)
    raise CustomQueryError(
        f"[{descriptor.attr}] custom query builder returned {type(node).__name__}",
        detail={"field": descriptor.attr, "type": type(node).__name__},
    )


__all__ = [
    "build_bool_query",
    "combine",
    "compile_exists",
    "compile_must",
    "fold_nested",
]
