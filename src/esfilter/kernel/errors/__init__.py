"""Kernel – error hierarchy public surface.

Hierarchy::

    BaseError
    ├── QueryCompileError                (compile.py, code bad_request)
    │   ├── StructExpectedError
    │   ├── StructNotSupportedError
    │   ├── TypeNotSupportedError
    │   ├── FullTextSearchUnsupportedError
    │   ├── MultiMatchUnsupportedError
    │   ├── InvalidRangeError
    │   └── AggregationTypeNotSupportedError
    ├── CustomQueryError                 (compile.py, code bad_request)
    ├── ResponseError                    (response.py, code unexpected_response)
    │   ├── DecodeError
    │   │   ├── AggregationTypeError
    │   │   └── AggregationShapeNotSupportedError  (also an AggregationTypeNotSupportedError)
    │   ├── ShardsIncompleteError        (code bad_gateway)
    │   └── EngineResponseError          (bad_request on 400, else bad_gateway)
    └── TransportError                   (response.py, code bad_gateway)
"""

from esfilter.kernel.errors.base import BaseError, ErrorCode
from esfilter.kernel.errors.compile import (
    AggregationTypeNotSupportedError,
    CustomQueryError,
    FullTextSearchUnsupportedError,
    InvalidRangeError,
    MultiMatchUnsupportedError,
    QueryCompileError,
    StructExpectedError,
    StructNotSupportedError,
    TypeNotSupportedError,
)
from esfilter.kernel.errors.response import (
    AggregationShapeNotSupportedError,
    AggregationTypeError,
    DecodeError,
    EngineResponseError,
    ResponseError,
    ShardsIncompleteError,
    TransportError,
)

__all__ = [
    "AggregationShapeNotSupportedError",
    "AggregationTypeError",
    "AggregationTypeNotSupportedError",
    "BaseError",
    "CustomQueryError",
    "DecodeError",
    "EngineResponseError",
    "ErrorCode",
    "FullTextSearchUnsupportedError",
    "InvalidRangeError",
    "MultiMatchUnsupportedError",
    "QueryCompileError",
    "ResponseError",
    "ShardsIncompleteError",
    "StructExpectedError",
    "StructNotSupportedError",
    "TransportError",
    "TypeNotSupportedError",
]
