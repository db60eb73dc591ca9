"""Kernel – compiler errors for invalid filter or aggregation input."""

from __future__ import annotations

from typing import Any

from esfilter.kernel.errors.base import BaseError, ErrorCode


class QueryCompileError(BaseError):
    """A filter or aggregation request could not be compiled.

    Never retried: the same input always fails the same way.
    """

    default_code = ErrorCode.BAD_REQUEST


class StructExpectedError(QueryCompileError):
    """The value handed to the compiler is not record-shaped."""

    def __init__(self, kind: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{kind}] filter must be a struct",
            detail={"kind": kind},
            **kwargs,
        )
        self.kind = kind


class StructNotSupportedError(QueryCompileError):
    """A record-valued field has no query mapping."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] struct is not supported",
            detail={"field": name},
            **kwargs,
        )
        self.name = name


class TypeNotSupportedError(QueryCompileError):
    """A scalar field kind has no query mapping."""

    def __init__(self, name: str, type_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] is of unknown type: {type_name}",
            detail={"field": name, "type": type_name},
            **kwargs,
        )
        self.name = name
        self.type_name = type_name


class FullTextSearchUnsupportedError(QueryCompileError):
    """A full text search payload is not a sequence of strings."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] full text search value is not supported",
            detail={"field": name},
            **kwargs,
        )
        self.name = name


class MultiMatchUnsupportedError(QueryCompileError):
    """A multi match search payload is not a sequence of strings."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] multi match search value is not supported",
            detail={"field": name},
            **kwargs,
        )
        self.name = name


class InvalidRangeError(QueryCompileError):
    """A range bound is outside the domain of its range type."""

    def __init__(self, name: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] invalid range: {reason}",
            detail={"field": name, "reason": reason},
            **kwargs,
        )
        self.name = name
        self.reason = reason


class AggregationTypeNotSupportedError(QueryCompileError):
    """An aggregation type tag (request) or shape (response) is unknown.

    Raised by the decoder with ``code=ErrorCode.UNEXPECTED_RESPONSE``.
    """

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] aggregation type is not supported",
            detail={"aggregation": name},
            **kwargs,
        )
        self.name = name


class CustomQueryError(BaseError):
    """Base for errors raised by caller-supplied custom query builders.

    The compiler re-raises whatever a builder raises; builders may use this
    class to get a ``bad_request`` code.
    """

    default_code = ErrorCode.BAD_REQUEST


__all__ = [
    "AggregationTypeNotSupportedError",
    "CustomQueryError",
    "FullTextSearchUnsupportedError",
    "InvalidRangeError",
    "MultiMatchUnsupportedError",
    "QueryCompileError",
    "StructExpectedError",
    "StructNotSupportedError",
    "TypeNotSupportedError",
]
