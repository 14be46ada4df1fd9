"""SQLAlchemy mapping metadata for the linksync domain model."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    and_,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from linksync.domain.model import (
    LinkRelation,
    ModeratedResourceType,
    ModeratorAction,
    ModeratorActionKind,
    Observation,
    ObservationLink,
    TaskLog,
    TaskStatus,
    User,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


def _string_enum(enum_cls: type[StrEnum]) -> Enum:
    # store values ("alternate"), not member names
    return Enum(enum_cls, native_enum=False, values_callable=_enum_values, length=32)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

user_table = Table(
    "users",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("login", String, nullable=False, unique=True),
    Column("is_admin", Boolean, nullable=False, default=False),
    Column("is_curator", Boolean, nullable=False, default=False),
)

observation_table = Table(
    "observations",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("created_at", UTCDateTime(), nullable=True),
)

observation_link_table = Table(
    "observation_links",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "observation_id",
        Integer,
        ForeignKey("observations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("href", Text, nullable=False),
    Column("href_name", String, nullable=False),
    Column("rel", _string_enum(LinkRelation), nullable=False),
    Column("created_at", UTCDateTime(), nullable=True),
    Column("updated_at", UTCDateTime(), nullable=False),
    Index("ix_observation_links_observation_href", "observation_id", "href"),
    Index("ix_observation_links_href_name_updated_at", "href_name", "updated_at"),
)

moderator_action_table = Table(
    "moderator_actions",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("resource_type", _string_enum(ModeratedResourceType), nullable=False),
    Column("resource_id", Integer, key="_resource_id", nullable=False),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("action", _string_enum(ModeratorActionKind), nullable=False),
    Column("reason", Text, nullable=True),
    Column("created_at", UTCDateTime(), nullable=True),
    Index("ix_moderator_actions_resource", "resource_type", "_resource_id"),
)

task_log_table = Table(
    "task_logs",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("task_group", String, key="group", nullable=False),
    Column("status", _string_enum(TaskStatus), nullable=False),
    Column("started_at", UTCDateTime(), nullable=False),
    Column("finished_at", UTCDateTime(), nullable=True),
    Column("error", Text, nullable=True),
)


def _moderator_actions_relationship(
    resource_table: Table,
    resource_type: ModeratedResourceType,
) -> orm.RelationshipProperty[ModeratorAction]:
    return relationship(
        ModeratorAction,
        cascade="all, delete-orphan",
        primaryjoin=and_(
            moderator_action_table.c._resource_id == resource_table.c.id,  # noqa: SLF001
            moderator_action_table.c.resource_type == resource_type,
        ),
        foreign_keys=[moderator_action_table.c._resource_id],  # noqa: SLF001
        order_by=moderator_action_table.c.id,
        overlaps="moderator_actions",
    )


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        User,
        user_table,
        properties={
            "moderator_actions": _moderator_actions_relationship(
                user_table,
                ModeratedResourceType.USER,
            ),
        },
    )

    mapper_registry.map_imperatively(
        Observation,
        observation_table,
        properties={
            "user": relationship(User, foreign_keys=[observation_table.c.user_id]),
            "moderator_actions": _moderator_actions_relationship(
                observation_table,
                ModeratedResourceType.OBSERVATION,
            ),
        },
    )

    mapper_registry.map_imperatively(
        ModeratorAction,
        moderator_action_table,
        properties={
            "user": relationship(User, foreign_keys=[moderator_action_table.c.user_id]),
        },
    )

    mapper_registry.map_imperatively(ObservationLink, observation_link_table)
    mapper_registry.map_imperatively(TaskLog, task_log_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
