"""Kernel – response errors: decode failures, engine errors, incomplete replies."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from esfilter.kernel.errors.base import BaseError, ErrorCode
from esfilter.kernel.errors.compile import AggregationTypeNotSupportedError

if TYPE_CHECKING:
    from esfilter.response.envelope import SearchResponse


class ResponseError(BaseError):
    """The engine answered, but the answer is not usable as-is."""

    default_code = ErrorCode.UNEXPECTED_RESPONSE


class DecodeError(ResponseError):
    """A response body could not be decoded into typed results."""


class AggregationTypeError(DecodeError, TypeError):
    """A bucket entry or its ``doc_count`` has the wrong JSON type."""

    def __init__(self, name: str, expected: str, **kwargs: Any) -> None:
        super().__init__(
            f"[{name}] aggregation {expected}",
            detail={"aggregation": name},
            **kwargs,
        )
        self.name = name


class AggregationShapeNotSupportedError(AggregationTypeNotSupportedError, DecodeError):
    """A reply aggregation is neither a metric nor a bucket aggregation.

    Still an :class:`AggregationTypeNotSupportedError`, but decoded from the
    engine reply, so it is also a :class:`DecodeError`.
    """

    default_code = ErrorCode.UNEXPECTED_RESPONSE


class ShardsIncompleteError(ResponseError):
    """Not every shard replied.

    Decoding still completed: ``response`` holds the partial result with
    ``total`` and ``took`` populated.
    """

    default_code = ErrorCode.BAD_GATEWAY
    default_retryable = True

    def __init__(
        self,
        replied: int,
        failed: int,
        total: int,
        *,
        response: SearchResponse | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"not all shards replied [replied={replied},failed={failed},total={total}]",
            detail={"replied": replied, "failed": failed, "total": total},
            **kwargs,
        )
        self.replied = replied
        self.failed = failed
        self.total = total
        self.response = response


class EngineResponseError(ResponseError):
    """The engine returned an error status (``code`` depends on the status)."""

    default_code = ErrorCode.BAD_GATEWAY

    def __init__(self, message: str, *, status: int, **kwargs: Any) -> None:
        kwargs.setdefault(
            "code",
            ErrorCode.BAD_REQUEST if status == 400 else ErrorCode.BAD_GATEWAY,
        )
        super().__init__(message, detail={"status": status}, **kwargs)
        self.status = status

    @property
    def retryable(self) -> bool:
        return self.status >= 500


class TransportError(BaseError):
    """The transport could not complete the round trip."""

    default_code = ErrorCode.BAD_GATEWAY
    default_retryable = True


__all__ = [
    "AggregationShapeNotSupportedError",
    "AggregationTypeError",
    "DecodeError",
    "EngineResponseError",
    "ResponseError",
    "ShardsIncompleteError",
    "TransportError",
]
