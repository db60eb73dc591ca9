"""Application search – SearchClient."""
from __future__ import annotations

from typing import Any

from esfilter.aggregations.compiler import build_aggs_query, has_aggregations
from esfilter.application.search.config import SearchConfig, build_search_params
from esfilter.application.search.transport import SearchTransport
from esfilter.kernel.errors import ShardsIncompleteError
from esfilter.observability.logging import (
    enrich_log_with_indexes,
    enrich_log_with_query,
    enrich_log_with_shards,
    enrich_log_with_took,
    get_logger,
    search_log_context,
)
from esfilter.query.compiler import build_bool_query
from esfilter.query.document import build_search_body, marshal
from esfilter.response.envelope import (
    SearchResponse,
    check_error_response,
    parse_response,
)

log = get_logger(__name__)


class SearchClient:
    """Compiles a :class:`SearchConfig`, runs it through a transport and
    decodes the reply.

    Errors surface with the code of the step that failed: ``bad_request``
    for compile errors and engine 400s, ``bad_gateway`` for transport
    failures, other engine errors and missing shards, ``unexpected_response``
    for bodies that could not be decoded.
    """

    def __init__(self, transport: SearchTransport) -> None:
        self._transport = transport

    @staticmethod
    def build_body(config: SearchConfig) -> dict[str, Any]:
        query = build_bool_query(config.filter)
        aggs = build_aggs_query(config.aggregations) if has_aggregations(config.aggregations) else None
        return build_search_body(query, aggs, config.search_after)

    async def search(self, config: SearchConfig) -> SearchResponse:
        with search_log_context():
            enrich_log_with_indexes(config.indexes)
            body = self.build_body(config)
            enrich_log_with_query(marshal(body))
            log.info("search_request", size=config.size, sort=config.sort.strings())

            reply = await self._transport.search(config.indexes, body, build_search_params(config))
            check_error_response(reply.status, reply.body)

            try:
                response = parse_response(reply.body)
            except ShardsIncompleteError as exc:
                if exc.response is not None:
                    enrich_log_with_took(exc.response.took)
                enrich_log_with_shards(exc.total)
                log.warning("search_shards_incomplete", failed=exc.failed, replied=exc.replied)
                raise

            enrich_log_with_took(response.took)
            enrich_log_with_shards(response.shards.total)
            log.info("search_response", total=response.total, hits=len(response.ids))
            return response


__all__ = ["SearchClient"]
