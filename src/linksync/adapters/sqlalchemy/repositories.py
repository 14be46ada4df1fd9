"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from linksync.adapters.sqlalchemy.mappings import observation_link_table
from linksync.domain.model import Observation, ObservationLink, TaskLog

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence
    from datetime import datetime

    from sqlalchemy.orm import Session


class SqlAlchemyObservationRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Observation) -> None:
        self.session.add(entity)

    def get(self, observation_id: int) -> Observation | None:
        return self.session.get(Observation, observation_id)


class SqlAlchemyObservationLinkRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: ObservationLink) -> None:
        self.session.add(entity)

    def get(self, observation_id: int, href: str) -> ObservationLink | None:
        stmt = (
            select(ObservationLink)
            .where(observation_link_table.c.observation_id == observation_id)
            .where(observation_link_table.c.href == href)
            .order_by(observation_link_table.c.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def find_stale(self, href_name: str, *, before: datetime) -> Sequence[ObservationLink]:
        stmt = (
            select(ObservationLink)
            .where(observation_link_table.c.href_name == href_name)
            .where(observation_link_table.c.updated_at < before)
            .order_by(observation_link_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()

    def delete_all(self, links: Iterable[ObservationLink]) -> int:
        deleted = 0
        for link in links:
            self.session.delete(link)
            deleted += 1
        return deleted

    def list_for_observations(self, observation_ids: Collection[int]) -> Sequence[ObservationLink]:
        if not observation_ids:
            return []
        stmt = (
            select(ObservationLink)
            .where(observation_link_table.c.observation_id.in_(list(observation_ids)))
            .order_by(observation_link_table.c.observation_id, observation_link_table.c.id)
        )
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyTaskLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: TaskLog) -> None:
        self.session.add(entity)


if TYPE_CHECKING:
    from linksync.domain.ports.persistence import (
        ObservationLinkRepository,
        ObservationRepository,
        TaskLogRepository,
    )

    _session_stub = cast("Session", object())
    _observation_repo: ObservationRepository = SqlAlchemyObservationRepository(_session_stub)
    _link_repo: ObservationLinkRepository = SqlAlchemyObservationLinkRepository(_session_stub)
    _task_log_repo: TaskLogRepository = SqlAlchemyTaskLogRepository(_session_stub)
