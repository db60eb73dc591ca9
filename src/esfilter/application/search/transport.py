"""Application search – SearchTransport port."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: bytes


@runtime_checkable
class SearchTransport(Protocol):
    """Executes a compiled search body against ``indexes``.

    Implementations never inspect or rewrite ``body``.
    """

    async def search(
        self,
        indexes: Sequence[str],
        body: Mapping[str, Any],
        params: Mapping[str, str],
    ) -> TransportResponse: ...


__all__ = ["SearchTransport", "TransportResponse"]
