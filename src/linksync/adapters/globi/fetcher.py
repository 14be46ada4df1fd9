"""Offset pagination over GloBI interactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from linksync.config.globi import GLOBI_PAGE_SIZE
from linksync.domain.ports.fetching import InteractionPage, InteractionPageFetcher

from .client import GlobiClient

if TYPE_CHECKING:
    from collections.abc import Iterator

log = getLogger(__name__)


@dataclass(slots=True)
class GlobiInteractionFetcher:
    """Yield interaction pages, advancing ``skip`` by ``limit``, until a page is empty.

    Assumes the provider neither reorders nor inserts records ahead of the
    cursor while a run is in progress.
    """

    client: GlobiClient = field(default_factory=GlobiClient)

    def __call__(
        self,
        *,
        according_to: str,
        limit: int = GLOBI_PAGE_SIZE,
    ) -> Iterator[InteractionPage]:
        if limit <= 0:
            raise ValueError("Page size must be positive")
        skip = 0
        while True:
            response = self.client.fetch_interactions(
                according_to=according_to,
                limit=limit,
                skip=skip,
            )
            if response.is_empty:
                log.info("No more GloBI interactions after skip=%s", skip)
                return
            yield InteractionPage(
                skip=skip,
                records=tuple(tuple(row) for row in response.data),
            )
            skip += limit


if TYPE_CHECKING:
    _fetcher_check: InteractionPageFetcher = GlobiInteractionFetcher()
