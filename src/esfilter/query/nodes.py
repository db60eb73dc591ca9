"""Query – QueryNode tree and its wire serialisation.

Each node renders itself with ``to_dict()``. Output key order is fixed, so
serialising the same tree twice yields identical JSON.
"""
from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timedelta
from typing import Any, Literal, Mapping

MAX_EXPANSIONS = 1024

MultiMatchType = Literal["phrase_prefix", "best_fields"]


def wire_value(value: Any) -> Any:
    """Convert a bound or term value into its JSON representation."""
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.utcoffset() == timedelta(0):
            return value.replace(tzinfo=None).isoformat() + "Z"
        return value.isoformat()
    return value


class QueryNode:
    """Base query node."""

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclasses.dataclass(frozen=True)
class MatchAllQuery(QueryNode):
    def to_dict(self) -> dict[str, Any]:
        return {"match_all": {}}


@dataclasses.dataclass(frozen=True)
class TermQuery(QueryNode):
    """Exact match on a single value."""

    field: str
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"term": {self.field: wire_value(self.value)}}


@dataclasses.dataclass(frozen=True)
class TermsQuery(QueryNode):
    """Exact match on any of several values."""

    field: str
    values: tuple[Any, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"terms": {self.field: [wire_value(v) for v in self.values]}}


@dataclasses.dataclass(frozen=True)
class RangeQuery(QueryNode):
    """Inclusive range; a ``None`` bound renders as ``null`` (open)."""

    field: str
    from_: Any = None
    to: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": {
                self.field: {
                    "from": wire_value(self.from_),
                    "include_lower": True,
                    "include_upper": True,
                    "to": wire_value(self.to),
                }
            }
        }


@dataclasses.dataclass(frozen=True)
class BoolQuery(QueryNode):
    """Compound query.

    A clause holding a single node is rendered as a bare object, several
    nodes as a list. Empty clauses are left out.
    """

    must: tuple[QueryNode, ...] = ()
    must_not: tuple[QueryNode, ...] = ()
    should: tuple[QueryNode, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.must or self.must_not or self.should)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for key, clause in (("must", self.must), ("must_not", self.must_not), ("should", self.should)):
            if len(clause) == 1:
                body[key] = clause[0].to_dict()
            elif clause:
                body[key] = [node.to_dict() for node in clause]
        return {"bool": body}


@dataclasses.dataclass(frozen=True)
class NestedQuery(QueryNode):
    """Query evaluated against the nested documents under ``path``."""

    path: str
    query: QueryNode

    def to_dict(self) -> dict[str, Any]:
        return {"nested": {"path": self.path, "query": self.query.to_dict()}}


@dataclasses.dataclass(frozen=True)
class MultiMatchQuery(QueryNode):
    """Full-text match of ``query`` across several fields."""

    query: str
    fields: tuple[str, ...]
    type: MultiMatchType = "best_fields"
    max_expansions: int = MAX_EXPANSIONS

    def to_dict(self) -> dict[str, Any]:
        return {
            "multi_match": {
                "fields": list(self.fields),
                "max_expansions": self.max_expansions,
                "query": self.query,
                "type": self.type,
            }
        }


@dataclasses.dataclass(frozen=True)
class ExistsQuery(QueryNode):
    field: str

    def to_dict(self) -> dict[str, Any]:
        return {"exists": {"field": self.field}}


@dataclasses.dataclass(frozen=True)
class Script:
    """Inline source or stored script id, with its language and params.

    An inline source starting with ``{`` or ``"`` is already JSON and is
    embedded as such; any other source is sent as a string.
    """

    script: str
    type: str = "inline"
    lang: str = ""
    params: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def stored(cls, script_id: str, **kwargs: Any) -> Script:
        return cls(script_id, type="id", **kwargs)

    def source(self) -> Any:
        if not self.type and not self.lang and not self.params:
            return self.script
        source: dict[str, Any] = {}
        if self.type in ("", "inline"):
            source["source"] = _raw_script_source(self.script)
        else:
            source["id"] = self.script
        if self.lang:
            source["lang"] = self.lang
        if self.params:
            source["params"] = dict(self.params)
        return dict(sorted(source.items()))


def _raw_script_source(script: str) -> Any:
    stripped = script.strip()
    if stripped.startswith(("{", '"')):
        return json.loads(stripped)
    return stripped


@dataclasses.dataclass(frozen=True)
class ScriptQuery(QueryNode):
    """Documents for which ``script`` returns true."""

    script: Script

    def to_dict(self) -> dict[str, Any]:
        return {"script": {"script": self.script.source()}}


@dataclasses.dataclass(frozen=True)
class RawQuery(QueryNode):
    """Pre-built query body, emitted verbatim (for custom query builders)."""

    source: Mapping[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return dict(self.source)


__all__ = [
    "MAX_EXPANSIONS",
    "BoolQuery",
    "ExistsQuery",
    "MatchAllQuery",
    "MultiMatchQuery",
    "MultiMatchType",
    "NestedQuery",
    "QueryNode",
    "RangeQuery",
    "RawQuery",
    "Script",
    "ScriptQuery",
    "TermQuery",
    "TermsQuery",
    "wire_value",
]
