"""Observations and the outbound links attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from linksync.domain.model.enums import (
    LinkRelation,
    ModeratedResourceType,
    ModeratorActionKind,
)
from linksync.domain.model.moderation import HasModeratorActions, User

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class Observation(HasModeratorActions):
    RESOURCE_TYPE: ClassVar[ModeratedResourceType] = ModeratedResourceType.OBSERVATION
    ACCEPTED_MODERATOR_ACTIONS: ClassVar[frozenset[ModeratorActionKind]] = frozenset(
        {ModeratorActionKind.HIDE, ModeratorActionKind.UNHIDE}
    )

    id: int
    user: User | None = field(default=None, repr=False)
    created_at: datetime | None = None

    @property
    def moderation_owner(self) -> User | None:
        return self.user


@dataclass(eq=False, kw_only=True)
class ObservationLink:
    """An external page that refers to an observation.

    ``href_name`` is the link category (the provider name, e.g. ``"GloBI"``);
    ``updated_at`` is bumped every time a sync run sees the link again.
    """

    observation_id: int
    href: str
    href_name: str
    rel: LinkRelation = LinkRelation.ALTERNATE
    created_at: datetime | None = None
    updated_at: datetime | None = None
    id: int | None = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.observation_id, self.href)

    def touch(self, at: datetime) -> None:
        self.updated_at = at
