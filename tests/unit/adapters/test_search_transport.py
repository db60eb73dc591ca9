"""Unit tests – httpx search transport."""
from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
import respx

from esfilter.adapters.http import HttpxSearchTransport, TickWait, simple_backoff
from esfilter.config import ElasticSettings
from esfilter.kernel.errors import ErrorCode, TransportError

_OK = {"took": 1, "hits": {"total": {"value": 0}, "hits": []}}


def _run(transport: HttpxSearchTransport, **kwargs: Any) -> Any:
    async def run() -> Any:
        async with transport:
            return await transport.search(
                kwargs.get("indexes", ("idx1", "idx2")),
                kwargs.get("body", {"query": {"match_all": {}}}),
                kwargs.get("params", {"size": "10"}),
            )

    return asyncio.run(run())


class TestSimpleBackoff:
    def test_ticks_then_zero(self) -> None:
        backoff = simple_backoff([10, 100])
        assert [backoff(n) for n in range(4)] == [0.01, 0.1, 0.0, 0.0]

    def test_tick_wait_uses_attempt_number(self) -> None:
        class State:
            attempt_number = 2

        assert TickWait([10, 100])(State()) == 0.1


class TestHttpxSearchTransport:
    @respx.mock
    def test_posts_compiled_body(self) -> None:
        route = respx.post("http://es:9200/idx1,idx2/_search").mock(
            return_value=httpx.Response(200, json=_OK)
        )
        reply = _run(HttpxSearchTransport(["http://es:9200/"]))

        assert reply.status == 200
        assert json.loads(reply.body) == _OK
        request = route.calls.last.request
        assert request.content == b'{"query":{"match_all":{}}}'
        assert request.url.params["size"] == "10"
        assert request.headers["content-type"] == "application/json"

    @respx.mock
    def test_error_status_returned_not_raised(self) -> None:
        respx.post("http://es:9200/idx1,idx2/_search").mock(
            return_value=httpx.Response(400, json={"error": {}})
        )
        reply = _run(HttpxSearchTransport(["http://es:9200"]))
        assert reply.status == 400

    @respx.mock
    def test_retries_connection_errors_on_next_url(self) -> None:
        first = respx.post("http://es1:9200/idx1,idx2/_search").mock(
            side_effect=httpx.ConnectError("refused")
        )
        second = respx.post("http://es2:9200/idx1,idx2/_search").mock(
            return_value=httpx.Response(200, json=_OK)
        )
        transport = HttpxSearchTransport(
            ["http://es1:9200", "http://es2:9200"], retry_backoff_ms=[0, 0]
        )

        reply = _run(transport)

        assert reply.status == 200
        assert first.call_count == 1
        assert second.call_count == 1

    @respx.mock
    def test_gives_up_after_last_tick(self) -> None:
        route = respx.post("http://es:9200/idx1,idx2/_search").mock(
            side_effect=httpx.ConnectError("refused")
        )
        transport = HttpxSearchTransport(["http://es:9200"], retry_backoff_ms=[0, 0])

        with pytest.raises(TransportError) as exc_info:
            _run(transport)
        assert exc_info.value.code == ErrorCode.BAD_GATEWAY
        assert route.call_count == 3

    @respx.mock
    def test_timeout_mapped(self) -> None:
        respx.post("http://es:9200/idx1,idx2/_search").mock(
            side_effect=httpx.ReadTimeout("slow")
        )
        transport = HttpxSearchTransport(["http://es:9200"], retry_backoff_ms=[])
        with pytest.raises(TransportError) as exc_info:
            _run(transport)
        assert "timed out" in exc_info.value.message

    @respx.mock
    def test_basic_auth(self) -> None:
        route = respx.post("http://es:9200/idx1,idx2/_search").mock(
            return_value=httpx.Response(200, json=_OK)
        )
        _run(HttpxSearchTransport(["http://es:9200"], username="elastic", password="secret"))
        assert route.calls.last.request.headers["authorization"].startswith("Basic ")

    def test_requires_url(self) -> None:
        with pytest.raises(ValueError):
            HttpxSearchTransport([])

    @respx.mock
    def test_from_settings(self) -> None:
        route = respx.post("http://es:9200/idx1,idx2/_search").mock(
            return_value=httpx.Response(200, json=_OK)
        )
        settings = ElasticSettings(urls=["http://es:9200"], retry_backoff_ms=[0])
        _run(HttpxSearchTransport.from_settings(settings))
        assert route.called
