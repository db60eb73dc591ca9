"""HTTP adapter – httpx search transport."""
from esfilter.adapters.http.backoff import TickWait, simple_backoff
from esfilter.adapters.http.transport import HttpxSearchTransport

__all__ = ["HttpxSearchTransport", "TickWait", "simple_backoff"]
