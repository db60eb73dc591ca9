"""Application search – configuration, transport port and client."""
from esfilter.application.search.config import SearchConfig, Sorter, Sorters, build_search_params
from esfilter.application.search.service import SearchClient
from esfilter.application.search.transport import SearchTransport, TransportResponse

__all__ = [
    "SearchClient",
    "SearchConfig",
    "SearchTransport",
    "Sorter",
    "Sorters",
    "TransportResponse",
    "build_search_params",
]
