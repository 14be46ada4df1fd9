"""SQLAlchemy adapter package for linksync."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyObservationLinkRepository,
    SqlAlchemyObservationRepository,
    SqlAlchemyTaskLogRepository,
)
from .unit_of_work import SqlAlchemyLinkUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyLinkUnitOfWork",
    "SqlAlchemyObservationLinkRepository",
    "SqlAlchemyObservationRepository",
    "SqlAlchemyTaskLogRepository",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
