"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class LinkRelation(StrEnum):
    ALTERNATE = "alternate"


class ModeratorActionKind(StrEnum):
    HIDE = "hide"
    UNHIDE = "unhide"
    SUSPEND = "suspend"
    UNSUSPEND = "unsuspend"


class ModeratedResourceType(StrEnum):
    """Discriminator for the polymorphic owner of a moderator action."""

    OBSERVATION = "observation"
    USER = "user"


class TaskStatus(StrEnum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
