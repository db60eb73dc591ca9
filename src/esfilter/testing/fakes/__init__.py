"""Testing fakes – in-memory doubles for the search transport."""
from esfilter.testing.fakes.transport import InMemorySearchTransport, RecordedSearch, empty_reply

__all__ = ["InMemorySearchTransport", "RecordedSearch", "empty_reply"]
