"""Ports the link sync depends on."""

from __future__ import annotations

from .fetching import InteractionPage, InteractionPageFetcher, InteractionRecord
from .indexing import SearchIndexer
from .persistence import (
    ObservationLinkRepository,
    ObservationRepository,
    Repository,
    TaskLogRepository,
)
from .unit_of_work import LinkRepositories, LinkUnitOfWork, RepositoryCollection, UnitOfWork

__all__ = [
    "InteractionPage",
    "InteractionPageFetcher",
    "InteractionRecord",
    "LinkRepositories",
    "LinkUnitOfWork",
    "ObservationLinkRepository",
    "ObservationRepository",
    "Repository",
    "RepositoryCollection",
    "SearchIndexer",
    "TaskLogRepository",
    "UnitOfWork",
]
