"""Moderator actions and the visibility rules derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from linksync.domain.model.enums import ModeratedResourceType, ModeratorActionKind

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(eq=False, kw_only=True)
class ModeratorAction:
    """One moderation decision recorded against a resource.

    ``resource_type`` names the kind of resource it belongs to; the resource
    id is filled in by the persistence mapping when the owner is saved.
    """

    action: ModeratorActionKind
    resource_type: ModeratedResourceType | None = None
    user: User | None = field(default=None, repr=False)
    reason: str | None = None
    created_at: datetime | None = None
    id: int | None = None


def _action_order(action: ModeratorAction) -> tuple[bool, int]:
    # unsaved actions are newer than anything persisted
    return (action.id is None, action.id or 0)


def _same_user(left: User, right: User) -> bool:
    if left is right:
        return True
    return left.id is not None and left.id == right.id


@dataclass(eq=False, kw_only=True)
class HasModeratorActions:
    """Visibility predicates for resources that moderators can hide.

    Subclasses declare ``RESOURCE_TYPE`` and the moderator actions they accept.
    ``moderation_owner`` names the user whose content this is: the resource's
    author, or the user itself for ``User`` resources.
    """

    RESOURCE_TYPE: ClassVar[ModeratedResourceType]
    ACCEPTED_MODERATOR_ACTIONS: ClassVar[frozenset[ModeratorActionKind]] = frozenset()

    moderator_actions: list[ModeratorAction] = field(
        default_factory=list["ModeratorAction"],
        repr=False,
    )

    @property
    def moderation_owner(self) -> User | None:
        return None

    def add_moderator_action(
        self,
        action: ModeratorActionKind,
        *,
        user: User,
        reason: str | None = None,
        created_at: datetime | None = None,
    ) -> ModeratorAction:
        if action not in self.ACCEPTED_MODERATOR_ACTIONS:
            raise ValueError(f"{type(self).__name__} does not accept moderator action {action}")
        moderator_action = ModeratorAction(
            action=action,
            resource_type=self.RESOURCE_TYPE,
            user=user,
            reason=reason,
            created_at=created_at,
        )
        self.moderator_actions.append(moderator_action)
        return moderator_action

    @property
    def latest_moderator_action(self) -> ModeratorAction | None:
        if not self.moderator_actions:
            return None
        return sorted(self.moderator_actions, key=_action_order)[-1]

    @property
    def hidden(self) -> bool:
        latest = self.latest_moderator_action
        return latest is not None and latest.action is ModeratorActionKind.HIDE

    def hideable_by(self, user: User | None) -> bool:
        if user is None:
            return False
        owner = self.moderation_owner
        if owner is not None and _same_user(owner, user):
            return False
        return user.is_admin or user.is_curator

    def unhideable_by(self, user: User | None) -> bool:
        return user is not None and self.hideable_by(user) and user.is_admin

    def hidden_content_viewable_by(self, user: User | None) -> bool:
        if user is None:
            return False
        if self.hideable_by(user):
            return True
        owner = self.moderation_owner
        return owner is not None and _same_user(owner, user)


@dataclass(eq=False, kw_only=True)
class User(HasModeratorActions):
    RESOURCE_TYPE: ClassVar[ModeratedResourceType] = ModeratedResourceType.USER
    ACCEPTED_MODERATOR_ACTIONS: ClassVar[frozenset[ModeratorActionKind]] = frozenset(
        {ModeratorActionKind.SUSPEND, ModeratorActionKind.UNSUSPEND}
    )

    login: str
    is_admin: bool = False
    is_curator: bool = False
    id: int | None = None

    @property
    def moderation_owner(self) -> User | None:
        return self
