"""Kernel – framework-agnostic building blocks."""

from esfilter.kernel.errors import (
    BaseError,
    DecodeError,
    ErrorCode,
    QueryCompileError,
    ResponseError,
    ShardsIncompleteError,
    TransportError,
)

__all__ = [
    "BaseError",
    "DecodeError",
    "ErrorCode",
    "QueryCompileError",
    "ResponseError",
    "ShardsIncompleteError",
    "TransportError",
]
