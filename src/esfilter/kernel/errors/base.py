"""Root error class and error codes."""

from __future__ import annotations

import json
from typing import Any, ClassVar


class ErrorCode:
    """Machine-readable codes surfaced to callers.

    ``BAD_REQUEST`` marks invalid caller input (compiler errors),
    ``BAD_GATEWAY`` a transport failure or an incomplete shard reply and
    ``UNEXPECTED_RESPONSE`` a body that could not be decoded.
    """

    BAD_REQUEST = "bad_request"
    BAD_GATEWAY = "bad_gateway"
    UNEXPECTED_RESPONSE = "unexpected_response"


class BaseError(Exception):
    """Root of the esfilter error hierarchy.

    Args:
        message: Human-readable description.
        code: One of the :class:`ErrorCode` values (defaults to ``default_code``).
        detail: Offending field, status or counters, JSON serialisable.
        cause: Lower-level exception that triggered this error.

    ``retryable`` tells a caller whether sending the same request again can
    succeed; it defaults to ``default_retryable`` and input errors never are.
    """

    default_code: ClassVar[str] = "base_error"
    default_retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def retryable(self) -> bool:
        return self.default_retryable

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for structured logs."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
            "retryable": self.retryable,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["BaseError", "ErrorCode"]
