"""Application search – SearchConfig and sorting."""
from __future__ import annotations

from dataclasses import dataclass, field

from esfilter.aggregations.request import RequestAggregation
from esfilter.query.entities import Filter


@dataclass(frozen=True)
class Sorter:
    field: str
    ascending: bool = True

    def __str__(self) -> str:
        return f"{self.field}:{'asc' if self.ascending else 'desc'}"


@dataclass(frozen=True)
class Sorters:
    sorters: tuple[Sorter, ...] = ()

    def strings(self) -> list[str]:
        return [str(s) for s in self.sorters]


@dataclass(frozen=True)
class SearchConfig:
    """Everything one search call needs.

    ``search_after`` is the paginator of the previous page, ``""`` for the
    first page.
    """

    indexes: tuple[str, ...]
    size: int = 10
    filter: Filter = field(default_factory=Filter)
    aggregations: RequestAggregation | None = None
    ignore_unavailable: bool = False
    allow_no_indices: bool = False
    track_total_hits: bool = False
    sort: Sorters = field(default_factory=Sorters)
    search_after: str = ""


def _flag(value: bool) -> str:
    return "true" if value else "false"


def build_search_params(config: SearchConfig) -> dict[str, str]:
    """URL query parameters of the ``_search`` call."""
    params = {
        "size": str(config.size),
        "ignore_unavailable": _flag(config.ignore_unavailable),
        "allow_no_indices": _flag(config.allow_no_indices),
        "track_total_hits": _flag(config.track_total_hits),
    }
    sort = config.sort.strings()
    if sort:
        params["sort"] = ",".join(sort)
    return params


__all__ = ["SearchConfig", "Sorter", "Sorters", "build_search_params"]
