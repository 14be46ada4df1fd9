"""Drive one reconciliation run from first page to staleness sweep."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from linksync.domain.link_sync.context import (
    LinkSyncContext,
    LinkSyncOptions,
    LinkSyncResult,
    utcnow,
)
from linksync.domain.link_sync.matching import match_record
from linksync.domain.link_sync.reconcile import LinkReconciler
from linksync.domain.link_sync.reindex import ReindexNotifier
from linksync.domain.link_sync.task_logging import logged_task

if TYPE_CHECKING:
    from collections.abc import Callable

    from linksync.domain.link_sync.context import Clock
    from linksync.domain.ports.fetching import InteractionPage, InteractionPageFetcher
    from linksync.domain.ports.indexing import SearchIndexer
    from linksync.domain.ports.unit_of_work import LinkUnitOfWork

log = getLogger(__name__)


def sync_observation_links(
    options: LinkSyncOptions,
    *,
    fetcher: InteractionPageFetcher,
    unit_of_work_factory: Callable[[], LinkUnitOfWork],
    indexer: SearchIndexer | None = None,
    reconciler: LinkReconciler | None = None,
    clock: Clock = utcnow,
) -> LinkSyncResult:
    """Reconcile the provider's current interactions with the stored links.

    Pages are processed strictly in order, each in its own unit of work and
    committed before its created ids are re-indexed. Links of
    ``options.href_name`` that were not created or refreshed since the run
    started are deleted only after the last page. Fetch errors abort the run;
    pages committed so far stay committed.
    """

    effective_reconciler = reconciler or LinkReconciler(clock=clock)
    task_name = None if options.dry_run else options.log_task_name

    with logged_task(task_name, unit_of_work_factory=unit_of_work_factory, clock=clock):
        context = LinkSyncContext(
            run_start=clock(),
            href_name=options.href_name,
            dry_run=options.dry_run,
        )
        notifier = ReindexNotifier(indexer, dry_run=options.dry_run)
        log.info(
            "Starting link sync: according_to=%s, href_name=%s, page_size=%s, dry_run=%s",
            options.according_to,
            options.href_name,
            options.page_size,
            options.dry_run,
        )

        for page in fetcher(according_to=options.according_to, limit=options.page_size):
            _process_page(
                page,
                context=context,
                reconciler=effective_reconciler,
                unit_of_work_factory=unit_of_work_factory,
            )
            notifier.notify(context.take_page_observation_ids())

        with unit_of_work_factory() as uow:
            deleted_ids = effective_reconciler.sweep_stale(
                uow.repositories.observation_links,
                context,
            )
            if deleted_ids:
                uow.commit()
        if deleted_ids:
            log.info("Re-indexing observations with deleted ObservationLinks")
        notifier.notify(deleted_ids)

        result = LinkSyncResult.from_context(context, finished_at=clock())

    log.info(
        "%s created, %s updated, %s deleted in %.2f s%s",
        result.created,
        result.refreshed,
        result.deleted,
        result.elapsed.total_seconds(),
        " (dry run)" if result.dry_run else "",
    )
    return result


def _process_page(
    page: InteractionPage,
    *,
    context: LinkSyncContext,
    reconciler: LinkReconciler,
    unit_of_work_factory: Callable[[], LinkUnitOfWork],
) -> None:
    context.pages += 1
    log.info("Processing %s records at skip=%s", len(page), page.skip)
    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        for record in page.records:
            observation = match_record(record, repositories.observations)
            if observation is None:
                context.skipped += 1
                log.info(
                    "\tobservation %r doesn't exist, skipping...",
                    record[0] if record else None,
                )
                continue
            reconciler.upsert(repositories.observation_links, observation, context)
        if not context.dry_run:
            uow.commit()
