"""Application orchestration entry points."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from linksync.adapters.globi import GlobiClient, GlobiInteractionFetcher
from linksync.adapters.search_index import SearchIndexClient
from linksync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLinkUnitOfWork,
    is_started,
    startup,
)
from linksync.config import get_globi_config, get_search_index_config
from linksync.domain.link_sync import (
    LinkReconciler,
    LinkSyncOptions,
    LinkSyncResult,
    sync_observation_links,
)
from linksync.domain.ports.unit_of_work import LinkUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from linksync.config import GlobiConfig, SearchIndexConfig
    from linksync.domain.model import ObservationLink
    from linksync.domain.ports.fetching import InteractionPageFetcher
    from linksync.domain.ports.indexing import SearchIndexer

UnitOfWorkFactory = Callable[[], LinkUnitOfWork]

log = getLogger(__name__)


def load_outlinks(
    unit_of_work_factory: UnitOfWorkFactory,
) -> Callable[[Sequence[int]], Mapping[int, Sequence[ObservationLink]]]:
    """Return a loader grouping the stored links of a batch of observations."""

    def load(observation_ids: Sequence[int]) -> Mapping[int, Sequence[ObservationLink]]:
        with unit_of_work_factory() as uow:
            links = uow.repositories.observation_links.list_for_observations(observation_ids)
        grouped: defaultdict[int, list[ObservationLink]] = defaultdict(list)
        for link in links:
            grouped[link.observation_id].append(link)
        return grouped

    return load


def build_search_indexer(
    unit_of_work_factory: UnitOfWorkFactory,
    *,
    config: SearchIndexConfig | None = None,
) -> SearchIndexer:
    return SearchIndexClient(
        config=config or get_search_index_config(),
        outlinks=load_outlinks(unit_of_work_factory),
    )


def sync_globi_links(
    *,
    according_to: str | None = None,
    debug: bool = False,
    log_task_name: str | None = None,
    config: GlobiConfig | None = None,
    fetcher: InteractionPageFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    indexer: SearchIndexer | None = None,
) -> LinkSyncResult:
    """Create, refresh, and expire GloBI links using the configured adapters.

    ``debug`` runs dry: counts are reported, nothing is written or re-indexed,
    and no search index configuration is required.
    """

    globi_config = config or get_globi_config()
    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyLinkUnitOfWork

    effective_fetcher = fetcher or GlobiInteractionFetcher(GlobiClient(config=globi_config))
    effective_indexer = indexer
    if effective_indexer is None and not debug:
        effective_indexer = build_search_indexer(unit_of_work_factory)

    options = LinkSyncOptions(
        according_to=according_to or globi_config.according_to,
        href_name=globi_config.href_name,
        page_size=globi_config.page_size,
        dry_run=debug,
        log_task_name=log_task_name,
    )
    log.info("Starting GloBI link sync: according_to=%s", options.according_to)

    return sync_observation_links(
        options,
        fetcher=effective_fetcher,
        unit_of_work_factory=unit_of_work_factory,
        indexer=effective_indexer,
        reconciler=LinkReconciler(observation_url_template=globi_config.observation_url_template),
    )
