"""Query – field classifier.

Turns a filter record into ``(FieldDescriptor, value)`` pairs. The schema
of a dataclass is derived once from its declared annotations and cached,
so the kind of every field is known before any value is looked at.

``Optional[X]`` plays the role of a pointer: ``None`` is skipped, while a
zero value behind it (``False``, ``IntRange(0, 0)``) is kept. A zero value
in a non-optional field is skipped.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import functools
import types
import typing
from typing import Any, Iterable, Iterator

from esfilter.kernel.errors import QueryCompileError, StructExpectedError
from esfilter.query.entities import (
    ES_TAG,
    RANGE_TYPES,
    CustomSearch,
    FullTextSearch,
    MultiMatchSearch,
    Nested,
    is_record,
)

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence)


class FieldKind(enum.Enum):
    STRINGS = "strings"
    UINTS = "uints"
    BOOL = "bool"
    RANGE = "range"
    NESTED = "nested"
    FULL_TEXT = "full_text"
    MULTI_MATCH = "multi_match"
    CUSTOM = "custom"
    RECORD = "record"
    SCALAR = "scalar"
    DYNAMIC = "dynamic"


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """How one record field maps onto the wire."""

    attr: str
    wire_names: tuple[str, ...]
    kind: FieldKind
    optional: bool = False
    type_name: str = ""
    skip_if_empty: bool = True

    def __post_init__(self) -> None:
        if not self.wire_names or any(not n or not n.strip() for n in self.wire_names):
            raise QueryCompileError(
                f"[{self.attr}] wire names must not be empty",
                detail={"field": self.attr},
            )

    @property
    def name(self) -> str:
        """Primary wire name."""
        return self.wire_names[0]

    def resolve(self, value: Any) -> FieldDescriptor:
        """Pin a ``DYNAMIC`` descriptor to the kind of ``value``."""
        if self.kind is not FieldKind.DYNAMIC:
            return self
        kind, type_name = _classify_value(value)
        return dataclasses.replace(self, kind=kind, type_name=type_name, optional=True)


def parse_wire_names(attr: str, tag: str | None) -> tuple[str, ...]:
    if not tag:
        return (attr,)
    names = tuple(part.strip() for part in tag.split(","))
    if any(not n for n in names):
        raise QueryCompileError(f"[{attr}] empty wire name in {tag!r}", detail={"field": attr})
    return names


def describe(attr: str, annotation: Any, names: str | None = None) -> FieldDescriptor:
    """Build the descriptor of one field from its declared annotation."""
    kind, optional, type_name = _classify_annotation(annotation)
    return FieldDescriptor(
        attr=attr,
        wire_names=parse_wire_names(attr, names),
        kind=kind,
        optional=optional,
        type_name=type_name,
    )


@functools.lru_cache(maxsize=None)
def schema_for(record_type: type) -> tuple[FieldDescriptor, ...]:
    """Descriptors of a dataclass, in declaration order."""
    hints = typing.get_type_hints(record_type)
    return tuple(
        describe(f.name, hints.get(f.name, Any), f.metadata.get(ES_TAG))
        for f in dataclasses.fields(record_type)
    )


def iter_fields(record: Any) -> Iterator[tuple[FieldDescriptor, Any]]:
    """Yield the non-skipped ``(descriptor, value)`` pairs of ``record``.

    Records implementing ``__es_fields__()`` enumerate themselves; other
    records must be dataclass instances.
    """
    if not is_record(record):
        raise StructExpectedError(type(record).__name__)

    pairs: Iterable[tuple[FieldDescriptor, Any]]
    if callable(getattr(record, "__es_fields__", None)):
        pairs = record.__es_fields__()
    else:
        pairs = ((d, getattr(record, d.attr)) for d in schema_for(type(record)))

    for descriptor, value in pairs:
        if value is None:
            continue
        descriptor = descriptor.resolve(value)
        if _should_skip(descriptor, value):
            continue
        yield descriptor, value


def _should_skip(descriptor: FieldDescriptor, value: Any) -> bool:
    if not descriptor.skip_if_empty:
        return False
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return not descriptor.optional and is_zero(value)


def is_zero(value: Any) -> bool:
    """Zero value of ``value``'s type (``False``, ``""``, ``0``, empty, all-zero record)."""
    if value is None:
        return True
    if isinstance(value, (bool, int, float, str, bytes)):
        return not value
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) == 0
    zero = getattr(value, "is_zero", None)
    if isinstance(zero, bool):
        return zero
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    return False


def _classify_annotation(annotation: Any) -> tuple[FieldKind, bool, str]:
    optional = False
    tp = annotation
    origin = typing.get_origin(tp)
    if origin in (typing.Union, types.UnionType):
        args = typing.get_args(tp)
        rest = [a for a in args if a is not type(None)]
        optional = len(rest) < len(args)
        if len(rest) != 1:
            return FieldKind.SCALAR, optional, " | ".join(_type_name(a) for a in rest)
        tp = rest[0]

    if tp is Any:
        return FieldKind.DYNAMIC, True, "Any"

    origin = typing.get_origin(tp)
    if origin in _SEQUENCE_ORIGINS:
        args = typing.get_args(tp)
        elem = args[0] if args else Any
        if elem is str:
            return FieldKind.STRINGS, optional, _type_name(tp)
        if elem is int:
            return FieldKind.UINTS, optional, _type_name(tp)
        return FieldKind.SCALAR, optional, _type_name(tp)

    if isinstance(tp, type):
        return _classify_class(tp), optional, _type_name(tp)
    return FieldKind.SCALAR, optional, _type_name(tp)


def _classify_class(tp: type) -> FieldKind:
    if tp is bool:
        return FieldKind.BOOL
    if issubclass(tp, RANGE_TYPES):
        return FieldKind.RANGE
    if issubclass(tp, Nested):
        return FieldKind.NESTED
    if issubclass(tp, FullTextSearch):
        return FieldKind.FULL_TEXT
    if issubclass(tp, MultiMatchSearch):
        return FieldKind.MULTI_MATCH
    if issubclass(tp, CustomSearch):
        return FieldKind.CUSTOM
    if dataclasses.is_dataclass(tp):
        return FieldKind.RECORD
    return FieldKind.SCALAR


def _classify_value(value: Any) -> tuple[FieldKind, str]:
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(v, str) for v in value):
            return FieldKind.STRINGS, "list[str]"
        if value and all(isinstance(v, int) and not isinstance(v, bool) for v in value):
            return FieldKind.UINTS, "list[int]"
        return FieldKind.SCALAR, type(value).__name__
    return _classify_class(type(value)), type(value).__name__


def _type_name(tp: Any) -> str:
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__name__
    return str(tp).replace("typing.", "")


__all__ = [
    "FieldDescriptor",
    "FieldKind",
    "describe",
    "is_zero",
    "iter_fields",
    "parse_wire_names",
    "schema_for",
]
