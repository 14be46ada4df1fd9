"""Options, run state, and outcome of a link sync run."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import timedelta

type Clock = Callable[[], datetime]

DEFAULT_HREF_NAME = "GloBI"
DEFAULT_PAGE_SIZE = 1000


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class LinkSyncOptions:
    """What a single run reconciles and whether it may write.

    ``dry_run`` computes and reports counts without persisting links or
    asking the search index to refresh.
    """

    according_to: str
    href_name: str = DEFAULT_HREF_NAME
    page_size: int = DEFAULT_PAGE_SIZE
    dry_run: bool = False
    log_task_name: str | None = None


@dataclass(slots=True)
class LinkSyncContext:
    """Mutable state of one reconciliation run, threaded through each step."""

    run_start: datetime
    href_name: str
    dry_run: bool = False
    created: int = 0
    refreshed: int = 0
    deleted: int = 0
    skipped: int = 0
    pages: int = 0
    page_observation_ids: set[int] = field(default_factory=set[int])
    seen_links: set[tuple[int, str]] = field(default_factory=set[tuple[int, str]])

    def take_page_observation_ids(self) -> set[int]:
        """Return the ids created on the current page and start a new page."""

        ids = self.page_observation_ids
        self.page_observation_ids = set()
        return ids


@dataclass(slots=True, frozen=True)
class LinkSyncResult:
    """Outcome of a link sync run."""

    created: int
    refreshed: int
    deleted: int
    skipped: int
    pages: int
    started_at: datetime
    finished_at: datetime
    dry_run: bool = False

    @property
    def elapsed(self) -> timedelta:
        return self.finished_at - self.started_at

    @classmethod
    def from_context(cls, context: LinkSyncContext, *, finished_at: datetime) -> LinkSyncResult:
        return cls(
            created=context.created,
            refreshed=context.refreshed,
            deleted=context.deleted,
            skipped=context.skipped,
            pages=context.pages,
            started_at=context.run_start,
            finished_at=finished_at,
            dry_run=context.dry_run,
        )
