"""HTTP adapter – fixed-tick retry backoff."""
from __future__ import annotations

from typing import Any, Callable, Sequence


def simple_backoff(ticks: Sequence[int]) -> Callable[[int], float]:
    """Wait, in seconds, before retry ``n`` (0-based) taken from ``ticks`` (ms).

    Retries beyond the list wait ``0``.
    """
    fixed = tuple(ticks)

    def backoff(retry: int) -> float:
        if retry < 0 or retry >= len(fixed):
            return 0.0
        return fixed[retry] / 1000

    return backoff


class TickWait:
    """tenacity wait strategy over :func:`simple_backoff`."""

    def __init__(self, ticks: Sequence[int]) -> None:
        self._backoff = simple_backoff(ticks)

    def __call__(self, retry_state: Any) -> float:
        return self._backoff(retry_state.attempt_number - 1)


__all__ = ["TickWait", "simple_backoff"]
