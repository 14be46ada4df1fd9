"""Bookkeeping rows for named batch runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from linksync.domain.model.enums import TaskStatus

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class TaskLog:
    name: str
    group: str
    started_at: datetime
    status: TaskStatus = TaskStatus.RUNNING
    finished_at: datetime | None = None
    error: str | None = None
    id: int | None = None

    def finish(self, at: datetime) -> None:
        self.status = TaskStatus.SUCCEEDED
        self.finished_at = at

    def fail(self, at: datetime, error: BaseException) -> None:
        self.status = TaskStatus.FAILED
        self.finished_at = at
        self.error = f"{type(error).__name__}: {error}"
