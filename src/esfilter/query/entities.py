"""Query – filter value objects.

Callers describe a search as plain dataclasses whose fields hold these
wrappers (or strings, unsigned integers and booleans)::

    @dataclass
    class PersonFilter:
        names: list[str] = es_field("Name")
        age: IntRange | None = es_field("Age")
        covid: Nested = es_field("Covid", default_factory=lambda: Nested(None))
        text: FullTextSearchShould | None = es_field("Name,SocialName")

    Filter(must=PersonFilter(names=["John", "Mary"]))

Payloads are validated when the wrapper is built.
"""
from __future__ import annotations

import dataclasses
import enum
import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Callable, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from esfilter.kernel.errors import (
    FullTextSearchUnsupportedError,
    InvalidRangeError,
    MultiMatchUnsupportedError,
    StructExpectedError,
)
from esfilter.query.nodes import QueryNode, wire_value

ES_TAG = "es"

T = TypeVar("T")


def es_field(names: str | None = None, **kwargs: Any) -> Any:
    """Declare a filter field with comma separated wire ``names``.

    Defaults to ``None`` when neither ``default`` nor ``default_factory``
    is given.
    """
    if "default" not in kwargs and "default_factory" not in kwargs:
        kwargs["default"] = None
    metadata = dict(kwargs.pop("metadata", None) or {})
    if names is not None:
        metadata[ES_TAG] = names
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(value: Any) -> bool:
    """True for dataclass instances and self-enumerating records."""
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or callable(getattr(value, "__es_fields__", None))


class PayloadJSON:
    """Wrappers serialise to the JSON of their payload alone."""

    payload: Any

    def to_json(self) -> str:
        return json.dumps(
            _jsonable(self.payload), separators=(",", ":"), ensure_ascii=False, default=str
        )


def _jsonable(value: Any) -> Any:
    if isinstance(value, PayloadJSON):
        return _jsonable(value.payload)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return wire_value(value)


def _is_string_sequence(payload: Any) -> bool:
    return (
        isinstance(payload, Sequence)
        and not isinstance(payload, (str, bytes))
        and all(isinstance(item, str) for item in payload)
    )


# ---------------------------------------------------------------------------
# Ranges
# ---------------------------------------------------------------------------


class _Range(Generic[T]):
    """A bound equal to the type's zero value is open."""

    from_: T
    to: T

    def _is_zero_bound(self, bound: T) -> bool:
        raise NotImplementedError

    def bounds(self) -> tuple[T | None, T | None]:
        lower = None if self._is_zero_bound(self.from_) else self.from_
        upper = None if self._is_zero_bound(self.to) else self.to
        return lower, upper

    @property
    def is_zero(self) -> bool:
        return self._is_zero_bound(self.from_) and self._is_zero_bound(self.to)


@dataclasses.dataclass(frozen=True)
class TimeRange(_Range[datetime]):
    from_: datetime | None = None
    to: datetime | None = None

    def _is_zero_bound(self, bound: datetime | None) -> bool:
        return bound is None or bound.replace(tzinfo=None) == datetime.min


@dataclasses.dataclass(frozen=True)
class IntRange(_Range[int]):
    """Unsigned integer range."""

    from_: int = 0
    to: int = 0

    def __post_init__(self) -> None:
        for bound in (self.from_, self.to):
            if bound < 0:
                raise InvalidRangeError("IntRange", f"negative bound {bound}")

    def _is_zero_bound(self, bound: int) -> bool:
        return bound == 0


@dataclasses.dataclass(frozen=True)
class FloatRange(_Range[float]):
    from_: float = 0.0
    to: float = 0.0

    def _is_zero_bound(self, bound: float) -> bool:
        return bound == 0


RANGE_TYPES: tuple[type, ...] = (TimeRange, IntRange, FloatRange)


# ---------------------------------------------------------------------------
# Nested
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Nested(PayloadJSON):
    """Sub-filter compiled against the nested documents at ``path``.

    ``path`` defaults to the first wire name of the field holding it.
    """

    payload: Any
    path: str | None = None

    def __post_init__(self) -> None:
        if self.payload is not None and not is_record(self.payload):
            raise StructExpectedError(type(self.payload).__name__)

    @property
    def is_zero(self) -> bool:
        return self.payload is None


# ---------------------------------------------------------------------------
# Full text / multi match
# ---------------------------------------------------------------------------


class SearchMode(enum.Enum):
    MUST = "must"
    SHOULD = "should"


@dataclasses.dataclass(frozen=True)
class FullTextSearch(PayloadJSON):
    """Phrase-prefix search of every string in ``payload``."""

    payload: tuple[str, ...]
    mode: ClassVar[SearchMode]

    def __post_init__(self) -> None:
        if not _is_string_sequence(self.payload):
            raise FullTextSearchUnsupportedError(type(self).__name__)
        object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def is_zero(self) -> bool:
        return not self.payload


@dataclasses.dataclass(frozen=True)
class FullTextSearchMust(FullTextSearch):
    mode: ClassVar[SearchMode] = SearchMode.MUST


@dataclasses.dataclass(frozen=True)
class FullTextSearchShould(FullTextSearch):
    mode: ClassVar[SearchMode] = SearchMode.SHOULD


@dataclasses.dataclass(frozen=True)
class MultiMatchSearch(PayloadJSON):
    """Best-fields search of every string in ``payload``."""

    payload: tuple[str, ...]
    mode: ClassVar[SearchMode] = SearchMode.SHOULD

    def __post_init__(self) -> None:
        if not _is_string_sequence(self.payload):
            raise MultiMatchUnsupportedError(type(self).__name__)
        object.__setattr__(self, "payload", tuple(self.payload))

    @property
    def is_zero(self) -> bool:
        return not self.payload


@dataclasses.dataclass(frozen=True)
class MultiMatchSearchShould(MultiMatchSearch):
    pass


# ---------------------------------------------------------------------------
# Custom
# ---------------------------------------------------------------------------


@runtime_checkable
class CustomQuery(Protocol):
    """Builds a query node, possibly failing."""

    def build_query(self) -> QueryNode: ...


class FunctionQuery:
    """Adapt a zero-argument callable to :class:`CustomQuery`."""

    def __init__(self, fn: Callable[[], QueryNode]) -> None:
        self._fn = fn

    def build_query(self) -> QueryNode:
        return self._fn()


@dataclasses.dataclass(frozen=True)
class CustomSearch(PayloadJSON):
    """Escape hatch: the node returned by ``builder`` is used as-is.

    ``payload`` is any JSON-serialisable value describing the search; it is
    only used by :meth:`to_json`.
    """

    builder: CustomQuery
    payload: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.builder, CustomQuery):
            raise TypeError(f"{type(self.builder).__name__} does not implement build_query()")


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class Filter:
    """Must / MustNot records compile to term, range and text queries;
    the Exists record compiles to exists queries."""

    must: Any = None
    must_not: Any = None
    exists: Any = None


__all__ = [
    "ES_TAG",
    "RANGE_TYPES",
    "CustomQuery",
    "CustomSearch",
    "Filter",
    "FloatRange",
    "FullTextSearch",
    "FullTextSearchMust",
    "FullTextSearchShould",
    "FunctionQuery",
    "IntRange",
    "MultiMatchSearch",
    "MultiMatchSearchShould",
    "Nested",
    "PayloadJSON",
    "SearchMode",
    "TimeRange",
    "es_field",
    "is_record",
]
