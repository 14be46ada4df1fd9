"""End-to-end GloBI link sync over SQLite with mocked HTTP services."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import httpx
import pytest

from linksync.adapters.globi import FetchRetriesExhaustedError, GlobiClient, GlobiInteractionFetcher
from linksync.adapters.http_resilience import ResilienceConfig, RetryPolicy
from linksync.adapters.search_index import SearchIndexClient
from linksync.app import load_outlinks, sync_globi_links
from linksync.config.globi import GlobiConfig
from linksync.config.search_index import SearchIndexConfig
from linksync.domain.model import Observation, TaskLog, TaskStatus
from tests.helpers.http import RecordingSleep, interaction_payload, make_client_factory
from tests.helpers.link_sync import globi_href

if TYPE_CHECKING:
    from collections.abc import Callable

    from linksync.adapters.sqlalchemy.unit_of_work import SqlAlchemyLinkUnitOfWork
    from linksync.domain.link_sync import LinkSyncResult

type UnitOfWorkFactory = Callable[[], SqlAlchemyLinkUnitOfWork]

PAGE_SIZE = 2
GLOBI_CONFIG = GlobiConfig(
    page_size=PAGE_SIZE,
    resilience=ResilienceConfig(
        name="globi-test",
        base_url="https://globi.test",
        retry=RetryPolicy(total=0),
    ),
)
SEARCH_CONFIG = SearchIndexConfig(
    index_name="observations",
    resilience=ResilienceConfig(
        name="search-test",
        base_url="http://search.test:9200",
        retry=RetryPolicy(total=0),
    ),
)


class FakeGlobi:
    """Serves ``observation_ids`` in pages; optionally fails the first few calls."""

    def __init__(self, observation_ids: list[int], *, failures: int = 0) -> None:
        self.observation_ids = observation_ids
        self.failures = failures
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.calls <= self.failures:
            return httpx.Response(200, text="<html>upstream timeout</html>")
        skip = int(request.url.params["skip"])
        limit = int(request.url.params["limit"])
        return httpx.Response(
            200,
            json=interaction_payload(*self.observation_ids[skip : skip + limit]),
        )


class FakeSearchIndex:
    def __init__(self) -> None:
        self.documents: dict[str, list[dict[str, str]]] = {}
        self.requests = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        lines = [json.loads(line) for line in request.content.decode().splitlines()]
        items: list[dict[str, object]] = []
        for action, doc in zip(lines[::2], lines[1::2], strict=True):
            doc_id = action["update"]["_id"]
            self.documents[doc_id] = doc["doc"]["outlinks"]
            items.append({"update": {"_id": doc_id, "status": 200}})
        return httpx.Response(200, json={"took": 1, "errors": False, "items": items})


def _seed(unit_of_work_factory: UnitOfWorkFactory, *observation_ids: int) -> None:
    with unit_of_work_factory() as uow:
        for observation_id in observation_ids:
            uow.repositories.observations.add(Observation(id=observation_id))
        uow.commit()


def _run(
    unit_of_work_factory: UnitOfWorkFactory,
    globi: FakeGlobi,
    search_index: FakeSearchIndex,
    *,
    debug: bool = False,
    log_task_name: str | None = None,
) -> LinkSyncResult:
    client = GlobiClient(
        config=GLOBI_CONFIG,
        client_factory=make_client_factory(globi),
        sleep=RecordingSleep(),
    )
    indexer = SearchIndexClient(
        config=SEARCH_CONFIG,
        outlinks=load_outlinks(unit_of_work_factory),
        client_factory=make_client_factory(search_index),
    )
    return sync_globi_links(
        debug=debug,
        log_task_name=log_task_name,
        config=GLOBI_CONFIG,
        fetcher=GlobiInteractionFetcher(client),
        unit_of_work_factory=unit_of_work_factory,
        indexer=indexer,
    )


def _stored_links(unit_of_work_factory: UnitOfWorkFactory) -> dict[int, str]:
    with unit_of_work_factory() as uow:
        links = uow.repositories.observation_links.list_for_observations(range(1, 100))
        return {link.observation_id: link.href for link in links}


def test_sync_creates_refreshes_and_expires_links(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    _seed(sqlite_unit_of_work, 1, 2, 3)
    search_index = FakeSearchIndex()

    first = _run(sqlite_unit_of_work, FakeGlobi([1, 2, 3, 404]), search_index)

    assert first.created == 3
    assert first.skipped == 1
    assert _stored_links(sqlite_unit_of_work) == {oid: globi_href(oid) for oid in (1, 2, 3)}
    assert search_index.documents["3"] == [{"source": "GloBI", "url": globi_href(3)}]
    assert "404" not in search_index.documents

    second = _run(sqlite_unit_of_work, FakeGlobi([2]), search_index)

    assert (second.created, second.refreshed, second.deleted) == (0, 1, 2)
    assert _stored_links(sqlite_unit_of_work) == {2: globi_href(2)}
    assert search_index.documents["1"] == []
    assert search_index.documents["3"] == []
    assert search_index.documents["2"] == [{"source": "GloBI", "url": globi_href(2)}]


def test_sync_survives_transient_provider_failures(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    _seed(sqlite_unit_of_work, 1)

    result = _run(sqlite_unit_of_work, FakeGlobi([1], failures=9), FakeSearchIndex())

    assert result.created == 1


def test_sync_aborts_when_provider_keeps_failing(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    _seed(sqlite_unit_of_work, 1)
    search_index = FakeSearchIndex()

    with pytest.raises(FetchRetriesExhaustedError):
        _run(
            sqlite_unit_of_work,
            FakeGlobi([1], failures=10),
            search_index,
            log_task_name="globi_observation_links",
        )

    assert _stored_links(sqlite_unit_of_work) == {}
    assert search_index.requests == 0
    with sqlite_unit_of_work() as uow:
        [task] = uow.session.query(TaskLog).all()
        assert task.status is TaskStatus.FAILED
        assert task.error is not None
        assert "FetchRetriesExhaustedError" in task.error


def test_dry_run_leaves_store_and_index_untouched(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    _seed(sqlite_unit_of_work, 1, 2)
    _run(sqlite_unit_of_work, FakeGlobi([1]), FakeSearchIndex())
    search_index = FakeSearchIndex()

    result = _run(sqlite_unit_of_work, FakeGlobi([2]), search_index, debug=True)

    assert (result.created, result.refreshed, result.deleted) == (1, 0, 1)
    assert _stored_links(sqlite_unit_of_work) == {1: globi_href(1)}
    assert search_index.requests == 0


def test_named_run_records_task_log(sqlite_unit_of_work: UnitOfWorkFactory) -> None:
    _seed(sqlite_unit_of_work, 1)

    _run(
        sqlite_unit_of_work,
        FakeGlobi([1]),
        FakeSearchIndex(),
        log_task_name="globi_observation_links",
    )

    with sqlite_unit_of_work() as uow:
        [task] = uow.session.query(TaskLog).all()
        assert task.name == "globi_observation_links"
        assert task.status is TaskStatus.SUCCEEDED
        assert task.finished_at is not None


def test_sync_skips_ids_too_large_for_the_database(
    sqlite_unit_of_work: UnitOfWorkFactory,
) -> None:
    _seed(sqlite_unit_of_work, 1)

    result = _run(sqlite_unit_of_work, FakeGlobi([1, 10**20]), FakeSearchIndex())

    assert (result.created, result.skipped) == (1, 1)
    assert _stored_links(sqlite_unit_of_work) == {1: globi_href(1)}
