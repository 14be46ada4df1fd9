"""Record named runs as task log rows."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from linksync.domain.model import TaskLog

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from linksync.domain.link_sync.context import Clock
    from linksync.domain.ports.unit_of_work import LinkUnitOfWork

log = getLogger(__name__)

DEFAULT_TASK_GROUP = "sync"


@contextmanager
def logged_task(
    name: str | None,
    *,
    unit_of_work_factory: Callable[[], LinkUnitOfWork],
    clock: Clock,
    group: str = DEFAULT_TASK_GROUP,
) -> Iterator[TaskLog | None]:
    """Persist a task log row around the managed block; no-op without a name.

    A failing block marks the row failed before the exception propagates.
    """

    if name is None:
        yield None
        return

    task = TaskLog(name=name, group=group, started_at=clock())
    with unit_of_work_factory() as uow:
        uow.repositories.task_logs.add(task)
        uow.commit()
    log.info("Task %s started", name)

    try:
        yield task
    except Exception as exc:
        with unit_of_work_factory() as uow:
            uow.repositories.task_logs.add(task)
            task.fail(clock(), exc)
            uow.commit()
        log.info("Task %s failed", name)
        raise

    with unit_of_work_factory() as uow:
        uow.repositories.task_logs.add(task)
        task.finish(clock())
        uow.commit()
    log.info("Task %s finished", name)
