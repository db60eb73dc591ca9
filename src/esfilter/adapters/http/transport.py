"""HTTP adapter – HttpxSearchTransport."""
from __future__ import annotations

import ssl
from typing import Any, Mapping, Sequence

import httpx
import tenacity

from esfilter.adapters.http.backoff import TickWait
from esfilter.application.search.transport import TransportResponse
from esfilter.config.settings.elastic import DEFAULT_RETRY_BACKOFF_MS, ElasticSettings
from esfilter.kernel.errors import TransportError
from esfilter.observability.logging import get_logger
from esfilter.query.document import marshal

log = get_logger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class HttpxSearchTransport:
    """Async httpx transport posting to ``<url>/<indexes>/_search``.

    Connection failures are retried once per backoff tick, each attempt on
    the next url of the list. The body is sent exactly as compiled.
    """

    def __init__(
        self,
        urls: Sequence[str],
        *,
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        ca_certs: str | None = None,
        timeout: float = 10.0,
        retry_backoff_ms: Sequence[int] = DEFAULT_RETRY_BACKOFF_MS,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not urls:
            raise ValueError("at least one url is required")
        self._urls = [u.rstrip("/") for u in urls]
        self._ticks = tuple(retry_backoff_ms)
        self._client = client or httpx.AsyncClient(
            auth=(username, password) if username is not None and password is not None else None,
            verify=_verify(verify_certs, ca_certs),
            timeout=timeout,
        )

    @classmethod
    def from_settings(
        cls, settings: ElasticSettings, **kwargs: Any
    ) -> HttpxSearchTransport:
        log.info("search_transport_configured", **settings.as_log_dict())
        return cls(
            settings.urls,
            username=settings.username,
            password=settings.password,
            verify_certs=settings.verify_certs,
            ca_certs=settings.ca_certs,
            timeout=settings.request_timeout,
            retry_backoff_ms=settings.retry_backoff_ms,
            **kwargs,
        )

    async def __aenter__(self) -> HttpxSearchTransport:
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def search(
        self,
        indexes: Sequence[str],
        body: Mapping[str, Any],
        params: Mapping[str, str],
    ) -> TransportResponse:
        path = f"/{','.join(indexes)}/_search" if indexes else "/_search"
        content = marshal(body)
        retrying = tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(len(self._ticks) + 1),
            wait=TickWait(self._ticks),
            retry=tenacity.retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    url = self._urls[(attempt.retry_state.attempt_number - 1) % len(self._urls)]
                    response = await self._client.post(
                        url + path, content=content, params=dict(params), headers=_JSON_HEADERS
                    )
        except httpx.TimeoutException as exc:
            raise TransportError(f"search request timed out: POST {path}", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"search request failed: POST {path}: {exc}", cause=exc) from exc
        return TransportResponse(response.status_code, response.content)

    @staticmethod
    def _log_retry(retry_state: tenacity.RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        log.warning(
            "search_request_retry",
            attempt=retry_state.attempt_number,
            error=repr(exc),
        )


def _verify(verify_certs: bool, ca_certs: str | None) -> ssl.SSLContext | bool:
    if ca_certs:
        return ssl.create_default_context(cafile=ca_certs)
    return verify_certs


__all__ = ["HttpxSearchTransport"]
