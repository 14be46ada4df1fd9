"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from linksync.domain.model import Observation, ObservationLink, TaskLog

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence
    from datetime import datetime


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class ObservationRepository(Repository[Observation], Protocol):
    def get(self, observation_id: int) -> Observation | None: ...


@runtime_checkable
class ObservationLinkRepository(Repository[ObservationLink], Protocol):
    """Persistence contract for observation links.

    Refreshing an existing link goes through ``ObservationLink.touch``; the
    repository persists the change with the surrounding unit of work.
    """

    def get(self, observation_id: int, href: str) -> ObservationLink | None: ...

    def find_stale(self, href_name: str, *, before: datetime) -> Sequence[ObservationLink]: ...

    def delete_all(self, links: Iterable[ObservationLink]) -> int: ...

    def list_for_observations(
        self, observation_ids: Collection[int]
    ) -> Sequence[ObservationLink]: ...


@runtime_checkable
class TaskLogRepository(Repository[TaskLog], Protocol):
    """Repository contract for task bookkeeping rows."""
