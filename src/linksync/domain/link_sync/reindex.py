"""Batch search-index refreshes for observations whose links changed."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Collection

    from linksync.domain.ports.indexing import SearchIndexer

log = getLogger(__name__)


class MissingIndexerError(RuntimeError):
    """Raised when a re-index is due but no search indexer was configured."""


@dataclass(slots=True)
class ReindexNotifier:
    indexer: SearchIndexer | None
    dry_run: bool = False
    wait_for_refresh: bool = True

    def notify(self, observation_ids: Collection[int]) -> bool:
        """Request one batched re-index; return whether a request was sent."""

        if not observation_ids:
            return False
        if self.dry_run:
            log.info("Dry run: not re-indexing %s observations", len(observation_ids))
            return False
        if self.indexer is None:
            raise MissingIndexerError(
                f"Cannot re-index {len(observation_ids)} observations without a search indexer"
            )
        log.info("Re-indexing %s observations...", len(observation_ids))
        self.indexer.reindex(sorted(observation_ids), wait_for_refresh=self.wait_for_refresh)
        return True
