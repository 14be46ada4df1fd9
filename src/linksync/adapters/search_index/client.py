"""Elasticsearch-compatible search index adapter for observation outlinks."""

from __future__ import annotations

import asyncio
import json
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from linksync.adapters.http_resilience import ResilientClient

from .schema import BulkResponse, OutlinkDocument

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from linksync.config.http_resilience import ResilienceConfig
    from linksync.config.search_index import SearchIndexConfig
    from linksync.domain.model import ObservationLink

log = getLogger(__name__)

NDJSON_CONTENT_TYPE = "application/x-ndjson"

type OutlinkSource = Callable[[Sequence[int]], Mapping[int, Sequence[ObservationLink]]]


class SearchIndexError(RuntimeError):
    """Raised when the search index rejects a re-index request."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def outlink_documents(links: Sequence[ObservationLink]) -> list[OutlinkDocument]:
    ordered = sorted(links, key=lambda link: (link.href_name, link.href))
    return [OutlinkDocument(source=link.href_name, url=link.href) for link in ordered]


def build_bulk_body(index_name: str, outlinks: Mapping[int, Sequence[ObservationLink]]) -> str:
    """Render partial ``outlinks`` updates as an NDJSON bulk request body."""

    lines: list[str] = []
    for observation_id in sorted(outlinks):
        documents = outlink_documents(outlinks[observation_id])
        lines.append(json.dumps({"update": {"_index": index_name, "_id": str(observation_id)}}))
        lines.append(
            json.dumps({"doc": {"outlinks": [doc.model_dump() for doc in documents]}})
        )
    return "\n".join(lines) + "\n"


class SearchIndexClient:
    """Rewrite each observation's ``outlinks`` field from the link store.

    ``outlinks`` loads the current links for a batch of observation ids; ids
    without links get an empty list, which clears links deleted this run.
    """

    def __init__(
        self,
        *,
        config: SearchIndexConfig,
        outlinks: OutlinkSource,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._outlinks = outlinks
        self._client_factory = client_factory or _default_client_factory

    def reindex(self, observation_ids: Sequence[int], *, wait_for_refresh: bool = True) -> None:
        if not observation_ids:
            return
        asyncio.run(self._reindex_async(observation_ids, wait_for_refresh=wait_for_refresh))

    async def _reindex_async(
        self,
        observation_ids: Sequence[int],
        *,
        wait_for_refresh: bool,
    ) -> None:
        loaded = self._outlinks(observation_ids)
        outlinks = {
            observation_id: loaded.get(observation_id, ()) for observation_id in observation_ids
        }
        body = build_bulk_body(self._config.index_name, outlinks)
        params = {"refresh": "wait_for" if wait_for_refresh else "false"}

        async with self._client_factory(self._resilience) as client:
            response = await client.post(
                f"/{self._config.index_name}/_bulk",
                content=body.encode("utf-8"),
                params=params,
                headers={"Content-Type": NDJSON_CONTENT_TYPE},
            )
        response.raise_for_status()

        try:
            result = BulkResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise SearchIndexError("Unexpected search index bulk response") from exc

        self._check_result(result)
        log.debug("Re-indexed %s observations in %s ms", len(outlinks), result.took)

    def _check_result(self, result: BulkResponse) -> None:
        if not result.errors:
            return
        failures = [item for item in result.results() if item.failed]
        missing = [item.id for item in failures if item.document_missing]
        if missing:
            log.warning("Observations missing from the search index: %s", ", ".join(missing))
        rejected = [item for item in failures if not item.document_missing]
        if rejected:
            ids = ", ".join(item.id for item in rejected)
            raise SearchIndexError(f"Search index rejected updates for observations: {ids}")

