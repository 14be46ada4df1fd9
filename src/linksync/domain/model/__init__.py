"""Public domain model surface."""

from __future__ import annotations

from linksync.domain.model.enums import (
    LinkRelation,
    ModeratedResourceType,
    ModeratorActionKind,
    TaskStatus,
)
from linksync.domain.model.moderation import HasModeratorActions, ModeratorAction, User
from linksync.domain.model.observation import Observation, ObservationLink
from linksync.domain.model.task_log import TaskLog

__all__ = [
    "HasModeratorActions",
    "LinkRelation",
    "ModeratedResourceType",
    "ModeratorAction",
    "ModeratorActionKind",
    "Observation",
    "ObservationLink",
    "TaskLog",
    "TaskStatus",
    "User",
]
